from datetime import timedelta

from flask import Blueprint, request, jsonify, current_app

from shiftboard.services import analytics_service
from shiftboard.services.alert_service import generate_alerts, RECENT_REPORT_WINDOW
from shiftboard.services.report_store import (
    accessible_store, count_reports_today, list_active_stores, list_recent_reports, list_reports
)
from shiftboard.services.status_service import build_status_grid, business_today, completion_stats
from shiftboard.services.trend_service import week_over_week, revenue_by_day
from shiftboard.utils.auth import login_required

analytics_bp = Blueprint('analytics', __name__, url_prefix='/analytics')


def _safe_metric(name, fn, *args, **kwargs):
    """One failing metric is logged and reported as null instead of sinking the dashboard."""
    try:
        return fn(*args, **kwargs)
    except Exception:
        current_app.logger.exception("Failed to compute analytics metric %s", name)
        return None


def _resolve_scope(user, store_id_arg):
    """
    Returns (stores, all_stores, error_response). Owners asking for 'all' or no
    store get every visible store they own.
    """
    if user.is_owner and (not store_id_arg or store_id_arg == 'all'):
        stores = list_active_stores(user)
        if not stores:
            return None, True, (jsonify({"error": "No stores found"}), 404)
        return stores, True, None

    if not store_id_arg:
        return None, False, (jsonify({"error": "Store ID is required"}), 400)
    try:
        store_id = int(store_id_arg)
    except ValueError:
        return None, False, (jsonify({"error": "Invalid store ID"}), 400)

    store = accessible_store(user, store_id, active_only=True)
    if not store:
        return None, False, (jsonify({"error": "Store not found or access denied"}), 404)
    return [store], False, None


def _days_arg():
    days = request.args.get('days', current_app.config['ANALYTICS_DEFAULT_DAYS'], type=int)
    return max(1, min(days, 365))


@analytics_bp.route('', methods=['GET'])
@login_required()
def get_analytics(user):
    stores, all_stores, error = _resolve_scope(user, request.args.get('store_id'))
    if error:
        return error

    store_ids = [s.id for s in stores]
    today = business_today(current_app.config['REPORT_TIMEZONE'])
    reports = list_reports(store_ids, today - timedelta(days=_days_arg()), today)

    recent = list_recent_reports(store_ids, limit=5)

    return jsonify({
        'today_reports': _safe_metric('today_reports', count_reports_today, store_ids, today),
        'total_reports': len(reports),
        'total_revenue': _safe_metric('total_revenue', analytics_service.total_revenue, reports),
        'average_tips': _safe_metric('average_tips', analytics_service.average_tips, reports),
        'avg_prep_completion': _safe_metric('avg_prep_completion', analytics_service.avg_prep_completion, reports),
        'trends': _safe_metric('trends', week_over_week, reports, today),
        'sales_breakdown': _safe_metric('sales_breakdown', analytics_service.sales_breakdown, reports),
        'revenue_by_day': _safe_metric('revenue_by_day', revenue_by_day, reports, include_stores=all_stores),
        'recent_reports': [
            {
                'id': r.id,
                'date': r.date.strftime('%Y-%m-%d'),
                'shift': r.shift,
                'total_sales': r.total_sales,
                'manager_name': r.manager_name,
                'store_name': r.store_name,
                'created_at': r.created_at.isoformat() if r.created_at else None,
            }
            for r in recent
        ],
        'is_all_stores': all_stores,
        'store_count': len(store_ids),
    })


@analytics_bp.route('/stores/<int:store_id>', methods=['GET'])
@login_required()
def get_store_metrics(user, store_id):
    store = accessible_store(user, store_id, active_only=True)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    today = business_today(current_app.config['REPORT_TIMEZONE'])
    reports = list_reports([store.id], today - timedelta(days=_days_arg()), today)

    metrics = _safe_metric('store_metrics', analytics_service.build_store_metrics, reports, today)
    if metrics is None:
        return jsonify({"error": "Failed to compute store metrics"}), 500

    metrics['store'] = {'id': store.id, 'name': store.name}
    return jsonify(metrics)


@analytics_bp.route('/today-status', methods=['GET'])
@login_required()
def get_today_status(user):
    stores = list_active_stores(user)
    today = business_today(current_app.config['REPORT_TIMEZONE'])
    todays_reports = list_reports([s.id for s in stores], today, today)

    grid = build_status_grid(stores, todays_reports, today)
    return jsonify({
        'date': today.isoformat(),
        'stores': grid,
        'stats': completion_stats(grid),
    })


@analytics_bp.route('/alerts', methods=['GET'])
@login_required()
def get_alerts(user):
    stores = list_active_stores(user)
    store_ids = [s.id for s in stores]
    today = business_today(current_app.config['REPORT_TIMEZONE'])

    grid = build_status_grid(stores, list_reports(store_ids, today, today), today)
    recent = list_recent_reports(store_ids, limit=RECENT_REPORT_WINDOW)

    alerts = generate_alerts(grid, recent, threshold=current_app.config['LOW_PREP_THRESHOLD'])
    return jsonify({'alerts': alerts})
