from datetime import date

from shiftboard.services import analytics_service as analytics


def test_single_report_totals_and_breakdown(make_record):
    reports = [make_record(date(2024, 1, 1), total_sales=1000.0, cash_sales=300.0, card_sales=700.0)]

    assert analytics.total_revenue(reports) == 1000
    breakdown = analytics.sales_breakdown(reports)
    assert breakdown['cash_percentage'] == 30
    assert breakdown['card_percentage'] == 70


def test_empty_input_yields_zeroes():
    assert analytics.total_revenue([]) == 0
    assert analytics.average_tips([]) == 0
    assert analytics.avg_prep_completion([]) == 0
    assert analytics.sales_breakdown([]) == {
        'cash': 0, 'card': 0, 'cash_percentage': 0, 'card_percentage': 0
    }
    assert analytics.manager_stats([]) == []
    assert all(task['percentage'] == 0 for task in analytics.prep_task_completion([]))


def test_zero_revenue_breakdown_has_zero_percentages(make_record):
    reports = [make_record(total_sales=0.0, cash_sales=0.0, card_sales=0.0)]
    breakdown = analytics.sales_breakdown(reports)
    assert breakdown['cash_percentage'] == 0
    assert breakdown['card_percentage'] == 0


def test_percentages_sum_to_hundred_on_half_splits(make_record):
    reports = [make_record(total_sales=800.0, cash_sales=100.0, card_sales=700.0)]
    breakdown = analytics.sales_breakdown(reports)
    assert breakdown['cash_percentage'] + breakdown['card_percentage'] == 100


def test_average_tips_divides_by_report_count(make_record):
    reports = [make_record(tip_amount=30.0), make_record(tip_amount=10.0)]
    assert analytics.average_tips(reports) == 20


def test_avg_prep_completion_rounds_and_stays_in_range(make_record):
    reports = [make_record(prep=(100, 50)), make_record(prep=(80, 70)), make_record(prep=(0, 0))]
    # (75 + 75 + 0) / 3 = 50
    assert analytics.avg_prep_completion(reports) == 50
    assert 0 <= analytics.avg_prep_completion([make_record(prep=(100, 100))]) <= 100


def test_till_variance_keeps_sign(make_record):
    shortage = make_record(starting_amount=200.0, ending_amount=150.5)
    overage = make_record(starting_amount=200.0, ending_amount=260.0)

    assert analytics.till_variance(shortage) == -49.5
    assert analytics.till_variance(overage) == 60

    summary = analytics.till_variance_summary([shortage, overage, make_record()])
    assert summary['shortages'] == 1
    assert summary['overages'] == 1
    assert summary['balanced'] == 1
    assert summary['total_variance'] == 10.5


def test_prep_task_completion_percentages(make_record):
    reports = [
        make_record(tasks=('prep_meat', 'prep_sauce')),
        make_record(tasks=('prep_meat',)),
        make_record(tasks=()),
    ]
    tasks = {t['task']: t for t in analytics.prep_task_completion(reports)}

    assert tasks['prep_meat']['completed'] == 2
    assert tasks['prep_meat']['percentage'] == 67
    assert tasks['prep_sauce']['percentage'] == 33
    assert tasks['prep_lettuce']['percentage'] == 0
    assert tasks['prep_lettuce']['total'] == 3
    assert len(tasks) == 6


def test_manager_stats_groups_in_first_appearance_order(make_record):
    reports = [
        make_record(manager_id=2, manager_name='Zoe', total_sales=100.0, prep=(100, 80)),
        make_record(manager_id=1, manager_name='Adam', total_sales=50.0, prep=(60, 60)),
        make_record(manager_id=2, manager_name='Zoe', total_sales=200.0, prep=(50, 50)),
    ]
    stats = analytics.manager_stats(reports)

    assert [s['name'] for s in stats] == ['Zoe', 'Adam']
    assert stats[0]['reports_count'] == 2
    assert stats[0]['total_revenue'] == 300
    # (90 + 50) / 2
    assert stats[0]['avg_prep_completion'] == 70
    assert stats[1]['avg_prep_completion'] == 60


def test_shift_comparison_counts_both_in_each_bucket(make_record):
    reports = [
        make_record(shift='MORNING', total_sales=100.0, prep=(80, 0)),
        make_record(shift='EVENING', total_sales=300.0, prep=(0, 60)),
        make_record(shift='BOTH', total_sales=200.0, prep=(100, 100)),
    ]
    comparison = analytics.shift_comparison(reports)

    assert comparison['morning'] == {'count': 2, 'avg_revenue': 150, 'avg_prep_completion': 90}
    assert comparison['evening'] == {'count': 2, 'avg_revenue': 250, 'avg_prep_completion': 80}


def test_build_summary_shape(make_record):
    reports = [make_record(date(2024, 3, 10), total_sales=500.0, cash_sales=500.0)]
    summary = analytics.build_summary(reports, date(2024, 3, 10), today_reports=1, store_count=1)

    assert summary['total_reports'] == 1
    assert summary['today_reports'] == 1
    assert summary['trends']['current_week_revenue'] == 500
    assert summary['trends']['revenue_growth'] == 0
    assert summary['revenue_by_day'][0]['date'] == '2024-03-10'
    assert summary['sales_breakdown']['cash_percentage'] == 100
