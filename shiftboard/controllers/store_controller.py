from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from shiftboard.extensions import db
from shiftboard.models.store import Store, ACTIVE, INACTIVE
from shiftboard.models.store_manager import StoreManager
from shiftboard.models.user import User, OWNER, MANAGER
from shiftboard.services.report_store import accessible_store, list_active_stores
from shiftboard.utils.auth import login_required
from shiftboard.utils.validators import validate_store_payload, ValidationError

store_bp = Blueprint("store_bp", __name__, url_prefix="/stores")

# List stores visible to the current user
@store_bp.route("", methods=["GET"])
@login_required()
def get_stores(user):
    include_inactive = request.args.get('include_inactive', '').lower() == 'true'

    if user.is_owner and include_inactive:
        stores = Store.query.filter_by(owner_id=user.id).order_by(Store.created_at.desc()).all()
    else:
        stores = list_active_stores(user)

    return jsonify({'stores': [store.to_dict(with_counts=True) for store in stores]})

# Create a new store
@store_bp.route("", methods=["POST"])
@login_required(OWNER, message="Only owners can create stores")
def create_store(user):
    try:
        data = validate_store_payload(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": "Invalid data", "details": e.errors}), 400

    try:
        store = Store(
            name=data['name'],
            address=data.get('address'),
            phone=data.get('phone'),
            owner_id=user.id,
            status=ACTIVE,
        )
        db.session.add(store)
        db.session.commit()
        return jsonify(store.to_dict(with_counts=True)), 201

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to create store")
        return jsonify({"error": "Failed to create store"}), 500

# Get a single store with its active managers
@store_bp.route("/<int:store_id>", methods=["GET"])
@login_required()
def get_store(user, store_id):
    store = accessible_store(user, store_id)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    data = store.to_dict(with_counts=True)
    data['managers'] = [
        {'id': manager.id, 'name': manager.name, 'email': manager.email}
        for manager in store.active_managers()
    ]
    return jsonify(data)

# Update a store
@store_bp.route("/<int:store_id>", methods=["PUT"])
@login_required(OWNER, message="Only owners can update stores")
def update_store(user, store_id):
    store = accessible_store(user, store_id, owner_only=True)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    try:
        data = validate_store_payload(request.get_json(silent=True), partial=True)
    except ValidationError as e:
        return jsonify({"error": "Invalid data", "details": e.errors}), 400

    try:
        for field in ('name', 'address', 'phone'):
            if field in data:
                setattr(store, field, data[field])
        if 'is_active' in data:
            store.status = ACTIVE if data['is_active'] else INACTIVE

        db.session.commit()
        return jsonify(store.to_dict(with_counts=True))

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to update store %s", store_id)
        return jsonify({"error": "Failed to update store"}), 500

# Soft delete: the store and all its assignments become inactive, reports stay
@store_bp.route("/<int:store_id>", methods=["DELETE"])
@login_required(OWNER, message="Only owners can delete stores")
def delete_store(user, store_id):
    store = accessible_store(user, store_id, owner_only=True)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    try:
        store.status = INACTIVE
        StoreManager.query.filter_by(store_id=store.id).update(
            {StoreManager.status: INACTIVE}, synchronize_session=False
        )
        db.session.commit()
        return jsonify({"message": "Store deleted successfully"})

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to delete store %s", store_id)
        return jsonify({"error": "Failed to delete store"}), 500

@store_bp.route("/<int:store_id>/toggle-status", methods=["POST"])
@login_required(OWNER, message="Only owners can change store status")
def toggle_store_status(user, store_id):
    store = accessible_store(user, store_id, owner_only=True)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    try:
        store.status = INACTIVE if store.is_active else ACTIVE
        db.session.commit()
        return jsonify(store.to_dict())

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to change status of store %s", store_id)
        return jsonify({"error": "Failed to change store status"}), 500

# Managers assigned to a store
@store_bp.route("/<int:store_id>/managers", methods=["GET"])
@login_required()
def get_store_managers(user, store_id):
    store = accessible_store(user, store_id)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    assignments = (
        StoreManager.query
        .filter(StoreManager.store_id == store.id, StoreManager.visible())
        .order_by(StoreManager.created_at.desc())
        .all()
    )

    return jsonify([
        {
            'assignment_id': a.id,
            'assigned_at': a.created_at.isoformat() if a.created_at else None,
            'id': a.manager.id,
            'name': a.manager.name,
            'email': a.manager.email,
            'report_count': a.manager.reports.count(),
        }
        for a in assignments
    ])

@store_bp.route("/<int:store_id>/managers", methods=["POST"])
@login_required(OWNER, message="Only owners can assign managers")
def assign_manager(user, store_id):
    store = accessible_store(user, store_id, owner_only=True)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    data = request.get_json(silent=True) or {}
    manager_id = data.get('manager_id')
    if not manager_id:
        return jsonify({"error": "Manager ID is required"}), 400

    manager = User.query.filter_by(id=manager_id, role=MANAGER).first()
    if not manager:
        return jsonify({"error": "Manager not found"}), 404

    assignment = StoreManager.query.filter_by(store_id=store.id, manager_id=manager.id).first()
    if assignment and assignment.is_active:
        return jsonify({"error": "Manager is already assigned to this store"}), 400

    try:
        if assignment:
            assignment.status = ACTIVE
            status_code = 200
        else:
            assignment = StoreManager(store_id=store.id, manager_id=manager.id, status=ACTIVE)
            db.session.add(assignment)
            status_code = 201
        db.session.commit()
        return jsonify(assignment.to_dict()), status_code

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to assign manager %s to store %s", manager_id, store_id)
        return jsonify({"error": "Failed to assign manager"}), 500

# Unassign is a soft flag flip so history stays attributable
@store_bp.route("/<int:store_id>/managers", methods=["DELETE"])
@login_required(OWNER, message="Only owners can unassign managers")
def unassign_manager(user, store_id):
    manager_id = request.args.get('manager_id', type=int)
    if not manager_id:
        return jsonify({"error": "Manager ID is required"}), 400

    store = accessible_store(user, store_id, owner_only=True)
    if not store:
        return jsonify({"error": "Store not found or access denied"}), 404

    assignment = StoreManager.query.filter_by(store_id=store.id, manager_id=manager_id).first()
    if not assignment:
        return jsonify({"error": "Manager is not assigned to this store"}), 404

    try:
        assignment.status = INACTIVE
        db.session.commit()
        return jsonify({"message": "Manager unassigned successfully"})

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to unassign manager %s from store %s", manager_id, store_id)
        return jsonify({"error": "Failed to unassign manager"}), 500
