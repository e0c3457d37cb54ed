from datetime import timedelta

from flask import Blueprint, jsonify, current_app

from shiftboard.models.store import Store
from shiftboard.models.store_manager import StoreManager
from shiftboard.models.user import MANAGER
from shiftboard.services.manager_dashboard_service import build_manager_dashboard
from shiftboard.services.report_store import list_recent_reports, list_reports
from shiftboard.services.status_service import business_today
from shiftboard.utils.auth import login_required

manager_bp = Blueprint('manager', __name__, url_prefix='/manager')

RECENT_REPORT_LIMIT = 20


def _active_assignments(user):
    return (
        StoreManager.query
        .join(Store, Store.id == StoreManager.store_id)
        .filter(StoreManager.manager_id == user.id, StoreManager.visible(), Store.visible())
        .order_by(StoreManager.created_at.asc())
        .all()
    )


@manager_bp.route('/stores', methods=['GET'])
@login_required(MANAGER)
def get_my_stores(user):
    stores = [a.store for a in _active_assignments(user)]
    return jsonify([
        {
            'id': store.id,
            'name': store.name,
            'address': store.address,
            'phone': store.phone,
            'is_active': store.is_active,
        }
        for store in stores
    ])


@manager_bp.route('/dashboard', methods=['GET'])
@login_required(MANAGER)
def get_dashboard(user):
    assignments = _active_assignments(user)
    store_ids = [a.store_id for a in assignments]
    today = business_today(current_app.config['REPORT_TIMEZONE'])

    recent = list_recent_reports(store_ids, limit=RECENT_REPORT_LIMIT, manager_id=user.id)
    week_reports = [
        r for r in list_reports(store_ids, today - timedelta(days=7), today)
        if r.manager_id == user.id
    ]

    return jsonify(build_manager_dashboard(assignments, recent, week_reports, today))
