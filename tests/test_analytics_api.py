from datetime import timedelta
from io import BytesIO

import pytest
from openpyxl import load_workbook

from shiftboard.services.status_service import business_today


@pytest.fixture
def today():
    return business_today('UTC')


@pytest.fixture
def stores(owner, manager, make_store, assign):
    downtown = make_store(owner, 'Downtown')
    uptown = make_store(owner, 'Uptown')
    assign(downtown, manager)
    return downtown, uptown


def test_owner_summary_covers_all_stores(client, owner, manager, stores, make_report, auth_headers, today):
    downtown, uptown = stores
    make_report(downtown, manager, today, tip_amount=40)
    make_report(uptown, manager, today - timedelta(days=1), total_sales=500, cash_sales=500, card_sales=0,
                tip_amount=20)
    make_report(downtown, manager, today - timedelta(days=8), total_sales=750)

    body = client.get('/analytics?store_id=all', headers=auth_headers(owner)).get_json()

    assert body['is_all_stores'] is True
    assert body['store_count'] == 2
    assert body['today_reports'] == 1
    assert body['total_reports'] == 3
    assert body['total_revenue'] == 2250
    assert body['average_tips'] == pytest.approx(36.67, abs=0.01)
    assert body['trends'] == {
        'revenue_growth': 100,
        'current_week_revenue': 1500,
        'previous_week_revenue': 750,
    }
    assert body['sales_breakdown']['cash'] == 1100
    assert len(body['recent_reports']) == 3
    assert 'stores' in body['revenue_by_day'][0]


def test_manager_needs_store_id(client, manager, stores, auth_headers):
    downtown, uptown = stores
    headers = auth_headers(manager)

    assert client.get('/analytics', headers=headers).status_code == 400
    assert client.get(f'/analytics?store_id={uptown.id}', headers=headers).status_code == 404

    body = client.get(f'/analytics?store_id={downtown.id}', headers=headers).get_json()
    assert body['is_all_stores'] is False
    assert body['total_reports'] == 0
    assert body['total_revenue'] == 0
    assert body['trends']['revenue_growth'] == 0


def test_owner_without_stores_gets_404(client, owner, auth_headers):
    assert client.get('/analytics', headers=auth_headers(owner)).status_code == 404


def test_store_metrics(client, owner, manager, stores, make_report, auth_headers, today):
    downtown, _uptown = stores
    make_report(downtown, manager, today, shift='MORNING', ending_amount=180, prep_meat=True)
    make_report(downtown, manager, today, shift='EVENING', morning_prep_completed=40, evening_prep_completed=60)

    body = client.get(f'/analytics/stores/{downtown.id}', headers=auth_headers(owner)).get_json()

    assert body['store'] == {'id': downtown.id, 'name': 'Downtown'}
    assert body['total_reports'] == 2
    assert body['summary']['total_revenue'] == 2000
    assert body['summary']['avg_prep_completion'] == 75
    assert body['shift_comparison']['morning']['count'] == 1
    assert body['till_variance']['shortages'] == 1
    assert body['manager_stats'][0]['name'] == 'Max Manager'
    prep = {task['task']: task for task in body['prep_completion']}
    assert prep['prep_meat']['percentage'] == 50


def test_today_status_and_alerts(client, owner, manager, stores, make_report, auth_headers, today):
    downtown, uptown = stores
    make_report(downtown, manager, today, shift='MORNING')
    make_report(uptown, manager, today - timedelta(days=1), shift='BOTH')

    headers = auth_headers(owner)
    status = client.get('/analytics/today-status', headers=headers).get_json()

    assert status['date'] == today.isoformat()
    grid = {entry['store_name']: entry for entry in status['stores']}
    assert grid['Downtown']['morning'] == {'submitted': True, 'manager': 'Max Manager'}
    assert grid['Downtown']['evening']['submitted'] is False
    assert grid['Uptown']['morning']['submitted'] is False
    assert status['stats'] == {'completed': 1, 'total': 4, 'percentage': 25}

    alerts = client.get('/analytics/alerts', headers=headers).get_json()['alerts']
    assert len(alerts) == 3
    assert all(alert['type'] == 'missing_report' for alert in alerts)


def test_low_prep_alert_surfaces(client, owner, manager, stores, make_report, auth_headers, today):
    downtown, _uptown = stores
    make_report(downtown, manager, today - timedelta(days=2), morning_prep_completed=40, evening_prep_completed=50)

    alerts = client.get('/analytics/alerts', headers=auth_headers(owner)).get_json()['alerts']

    low_prep = [alert for alert in alerts if alert['type'] == 'low_prep']
    assert len(low_prep) == 1
    assert low_prep[0]['severity'] == 'error'
    assert '45%' in low_prep[0]['message']


def test_manager_dashboard(client, manager, stores, make_report, auth_headers, today):
    downtown, _uptown = stores
    make_report(downtown, manager, today, shift='MORNING', morning_prep_completed=80)
    make_report(downtown, manager, today - timedelta(days=1), shift='EVENING', evening_prep_completed=60)

    body = client.get('/manager/dashboard', headers=auth_headers(manager)).get_json()

    assert [store['name'] for store in body['stores']] == ['Downtown']
    store = body['stores'][0]
    assert store['last_report_date'] == today.strftime('%Y-%m-%d')
    assert store['completion_rate'] == 70
    assert [r['prep_completion'] for r in store['recent_reports']] == [80, 60]
    assert body['weekly_stats'] == {
        'total_reports': 2,
        'avg_prep_completion': 70,
        'expected_reports': 14,
        'missed_shifts': 12,
    }

    stores_list = client.get('/manager/stores', headers=auth_headers(manager)).get_json()
    assert [s['id'] for s in stores_list] == [downtown.id]


def test_manager_routes_reject_owner(client, owner, auth_headers):
    assert client.get('/manager/dashboard', headers=auth_headers(owner)).status_code == 403


def test_export_workbook(client, owner, manager, stores, make_report, auth_headers, today):
    downtown, _uptown = stores
    make_report(downtown, manager, today)

    response = client.post('/export/analytics', json={
        'store_id': 'all',
        'start_date': (today - timedelta(days=7)).isoformat(),
        'end_date': today.isoformat(),
    }, headers=auth_headers(owner))

    assert response.status_code == 200
    assert 'Analytics_All_Stores_' in response.headers['Content-Disposition']

    workbook = load_workbook(BytesIO(response.data))
    assert workbook.sheetnames == ['Summary', 'Daily Revenue', 'Managers', 'Prep Tasks']


def test_export_validation(client, owner, manager, stores, auth_headers):
    downtown, uptown = stores
    assert client.post('/export/analytics', json={
        'start_date': '2024-06-10', 'end_date': '2024-06-01'
    }, headers=auth_headers(owner)).status_code == 400
    assert client.post('/export/analytics', json={
        'start_date': 'June 1st'
    }, headers=auth_headers(owner)).status_code == 400
    assert client.post('/export/analytics', json={'store_id': 'all'},
                       headers=auth_headers(manager)).status_code == 400
    assert client.post('/export/analytics', json={'store_id': uptown.id},
                       headers=auth_headers(manager)).status_code == 404

    single = client.post('/export/analytics', json={'store_id': downtown.id}, headers=auth_headers(manager))
    assert single.status_code == 200
    assert 'Analytics_Downtown_' in single.headers['Content-Disposition']


def test_soft_deleted_store_is_hidden_from_analytics(client, owner, manager, stores, make_report, auth_headers, today):
    downtown, _uptown = stores
    make_report(downtown, manager, today)
    headers = auth_headers(owner)

    assert client.delete(f'/stores/{downtown.id}', headers=headers).status_code == 200

    assert client.get(f'/analytics?store_id={downtown.id}', headers=headers).status_code == 404
    assert client.get(f'/analytics/stores/{downtown.id}', headers=headers).status_code == 404
    assert client.post('/export/analytics', json={'store_id': downtown.id}, headers=headers).status_code == 404

    everything = client.get('/analytics', headers=headers).get_json()
    assert everything['store_count'] == 1
    assert everything['total_revenue'] == 0


def test_export_rejects_non_string_dates(client, owner, stores, auth_headers):
    response = client.post('/export/analytics', json={
        'store_id': 'all', 'start_date': 20240601, 'end_date': '2024-06-10'
    }, headers=auth_headers(owner))
    assert response.status_code == 400
