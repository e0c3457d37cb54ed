from flask import Blueprint, jsonify
from sqlalchemy import func

from shiftboard.extensions import db
from shiftboard.models.daily_report import DailyReport
from shiftboard.models.store import Store
from shiftboard.models.store_manager import StoreManager
from shiftboard.models.user import User, OWNER, MANAGER
from shiftboard.utils.auth import login_required

managers_bp = Blueprint('managers', __name__, url_prefix='/managers')

# Every manager account, with the owner's stores each one is actively assigned to.
# Read-only: accounts themselves are provisioned outside the API.
@managers_bp.route('', methods=['GET'])
@login_required(OWNER, message="Only owners can view managers")
def get_managers(user):
    managers = User.query.filter_by(role=MANAGER).order_by(User.created_at.desc(), User.id.desc()).all()

    assignments = (
        StoreManager.query
        .join(Store, Store.id == StoreManager.store_id)
        .filter(Store.owner_id == user.id, Store.visible(), StoreManager.visible())
        .order_by(StoreManager.created_at.asc())
        .all()
    )
    stores_by_manager = {}
    for assignment in assignments:
        stores_by_manager.setdefault(assignment.manager_id, []).append(assignment.store)

    report_counts = dict(
        db.session.query(DailyReport.manager_id, func.count(DailyReport.id))
        .join(Store, Store.id == DailyReport.store_id)
        .filter(Store.owner_id == user.id)
        .group_by(DailyReport.manager_id)
        .all()
    )

    return jsonify([
        {
            'id': manager.id,
            'name': manager.name,
            'email': manager.email,
            'created_at': manager.created_at.isoformat() if manager.created_at else None,
            'stores': [
                {'id': store.id, 'name': store.name, 'address': store.address}
                for store in stores_by_manager.get(manager.id, [])
            ],
            'report_count': report_counts.get(manager.id, 0),
        }
        for manager in managers
    ])
