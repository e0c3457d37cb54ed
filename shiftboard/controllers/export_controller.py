from datetime import datetime, timedelta

from flask import Blueprint, request, jsonify, send_file, current_app

from shiftboard.services.excel_export.generator import AnalyticsWorkbookGenerator
from shiftboard.services.report_store import (
    accessible_store, count_reports_today, list_active_stores, list_reports
)
from shiftboard.services.status_service import business_today
from shiftboard.utils.auth import login_required

export_bp = Blueprint('export', __name__, url_prefix="/export")

@export_bp.route('/analytics', methods=['POST'])
@login_required()
def export_analytics(user):
    data = request.get_json(silent=True) or {}
    store_id = data.get('store_id', 'all')
    today = business_today(current_app.config['REPORT_TIMEZONE'])

    try:
        end_date = datetime.strptime(data['end_date'], '%Y-%m-%d').date() if data.get('end_date') else today
        start_date = (
            datetime.strptime(data['start_date'], '%Y-%m-%d').date() if data.get('start_date')
            else end_date - timedelta(days=current_app.config['ANALYTICS_DEFAULT_DAYS'])
        )
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid date format, expected YYYY-MM-DD"}), 400

    if start_date > end_date:
        return jsonify({"error": "start_date must not be after end_date"}), 400

    if store_id == 'all':
        if not user.is_owner:
            return jsonify({"error": "Store ID is required"}), 400
        stores = list_active_stores(user)
    else:
        store = accessible_store(user, store_id, active_only=True) if isinstance(store_id, int) else None
        stores = [store] if store else []

    if not stores:
        return jsonify({"error": "Store not found or access denied"}), 404

    store_ids = [s.id for s in stores]
    try:
        generator = AnalyticsWorkbookGenerator(
            stores=stores,
            reports=list_reports(store_ids, start_date, end_date),
            start_date=start_date,
            end_date=end_date,
            today_reports=count_reports_today(store_ids, today),
        )
        excel_file = generator.generate_report()
    except Exception:
        current_app.logger.exception("Analytics export failed")
        return jsonify({"error": "Report generation failed"}), 500

    label = 'All_Stores' if len(stores) > 1 else stores[0].name
    safe_label = label.replace('/', '_').replace('\\', '_').replace(' ', '_')
    filename = f"Analytics_{safe_label}_{start_date.strftime('%Y%m%d')}_{end_date.strftime('%Y%m%d')}.xlsx"

    return send_file(
        excel_file,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=filename
    )
