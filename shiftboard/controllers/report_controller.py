from datetime import datetime

from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from shiftboard.extensions import db
from shiftboard.models.daily_report import DailyReport, SHIFTS, BOTH
from shiftboard.models.store import Store
from shiftboard.models.user import MANAGER
from shiftboard.services.report_store import accessible_store, upsert_report
from shiftboard.utils.auth import login_required
from shiftboard.utils.validators import validate_report_payload, ValidationError

report_bp = Blueprint('reports', __name__, url_prefix='/reports')

@report_bp.route('', methods=['GET'])
@login_required()
def get_reports(user):
    store_id = request.args.get('store_id', type=int)
    date_str = request.args.get('date')
    shift = request.args.get('shift')
    limit = request.args.get('limit', 50, type=int)

    query = DailyReport.query.options(
        joinedload(DailyReport.store), joinedload(DailyReport.manager)
    )
    if user.is_owner:
        query = query.join(Store, Store.id == DailyReport.store_id).filter(Store.owner_id == user.id)
    else:
        query = query.filter(DailyReport.manager_id == user.id)

    if store_id:
        if not accessible_store(user, store_id):
            return jsonify({'error': 'Access denied to this store'}), 403
        query = query.filter(DailyReport.store_id == store_id)

    if date_str:
        try:
            query = query.filter(DailyReport.date == datetime.strptime(date_str, "%Y-%m-%d").date())
        except ValueError:
            return jsonify({'error': 'Invalid date format, expected YYYY-MM-DD'}), 400

    if shift and shift != BOTH:
        if shift not in SHIFTS:
            return jsonify({'error': f"Invalid shift: {shift}"}), 400
        query = query.filter(DailyReport.shift == shift)

    reports = query.order_by(DailyReport.date.desc(), DailyReport.id.desc()).limit(max(1, min(limit, 200))).all()
    return jsonify([report.to_dict() for report in reports])

@report_bp.route('', methods=['POST'])
@login_required(MANAGER, message="Only managers can submit reports")
def submit_report(user):
    data = request.get_json(silent=True)

    try:
        payload = validate_report_payload(data)
    except ValidationError as e:
        return jsonify({'error': 'Invalid data', 'details': e.errors}), 400

    store_id = data.get('store_id')
    if not isinstance(store_id, int) or isinstance(store_id, bool):
        return jsonify({'error': 'Invalid data', 'details': {'store_id': 'is required'}}), 400

    store = accessible_store(user, store_id)
    if not store or not store.is_active:
        return jsonify({'error': "You don't have access to this store"}), 403

    try:
        report, created = upsert_report(store.id, user.id, payload)
        db.session.commit()
    except IntegrityError:
        # A concurrent submission inserted the same key first; update it instead
        db.session.rollback()
        try:
            report, created = upsert_report(store.id, user.id, payload)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Failed to save report for store %s", store.id)
            return jsonify({'error': 'Failed to save report'}), 500
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to save report for store %s", store.id)
        return jsonify({'error': 'Failed to save report'}), 500

    current_app.logger.info(
        "Report %s for store %s on %s (%s) by manager %s",
        'created' if created else 'updated', store.id, report.date, report.shift, user.id
    )
    return jsonify(report.to_dict()), 201 if created else 200
