from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import joinedload

from shiftboard.extensions import db
from shiftboard.models.daily_report import DailyReport
from shiftboard.models.store import Store
from shiftboard.models.store_manager import StoreManager
from shiftboard.models.user import User
from shiftboard.services.report_record import ReportRecord


def _with_relations(query):
    return query.options(joinedload(DailyReport.store), joinedload(DailyReport.manager))


def list_active_stores(user: User) -> List[Store]:
    """Stores visible to the user: owned ones for owners, actively assigned ones for managers."""
    query = Store.query.filter(Store.visible())
    if user.is_owner:
        query = query.filter(Store.owner_id == user.id)
    else:
        query = query.join(StoreManager, StoreManager.store_id == Store.id).filter(
            StoreManager.manager_id == user.id,
            StoreManager.visible(),
        )
    return query.order_by(Store.created_at.desc(), Store.id.desc()).all()


def accessible_store(user: User, store_id: int, owner_only: bool = False,
                     active_only: bool = False) -> Optional[Store]:
    """
    The store if the user owns it or (unless owner_only) is actively assigned to it.
    With active_only, soft-deleted stores are treated as missing.
    """
    store = db.session.get(Store, store_id)
    if store is None or (active_only and not store.is_active):
        return None
    if store.owner_id == user.id:
        return store
    if owner_only or not user.is_manager:
        return None
    assignment = StoreManager.query.filter(
        StoreManager.store_id == store_id,
        StoreManager.manager_id == user.id,
        StoreManager.visible(),
    ).first()
    return store if assignment else None


def list_reports(store_ids: Iterable[int], date_from: date, date_to: date) -> List[ReportRecord]:
    store_ids = list(store_ids)
    if not store_ids:
        return []
    reports = (
        _with_relations(DailyReport.query)
        .filter(
            DailyReport.store_id.in_(store_ids),
            DailyReport.date >= date_from,
            DailyReport.date <= date_to,
        )
        .order_by(DailyReport.date.asc(), DailyReport.id.asc())
        .all()
    )
    return [ReportRecord.from_model(r) for r in reports]


def count_reports_today(store_ids: Iterable[int], today: date) -> int:
    store_ids = list(store_ids)
    if not store_ids:
        return 0
    return DailyReport.query.filter(
        DailyReport.store_id.in_(store_ids),
        DailyReport.date == today,
    ).count()


def list_recent_reports(store_ids: Iterable[int], limit: int, manager_id: int = None) -> List[ReportRecord]:
    """Most recently submitted reports first."""
    store_ids = list(store_ids)
    if not store_ids:
        return []
    query = _with_relations(DailyReport.query).filter(DailyReport.store_id.in_(store_ids))
    if manager_id is not None:
        query = query.filter(DailyReport.manager_id == manager_id)
    reports = query.order_by(DailyReport.created_at.desc(), DailyReport.id.desc()).limit(limit).all()
    return [ReportRecord.from_model(r) for r in reports]


def upsert_report(store_id: int, manager_id: int, payload: dict) -> Tuple[DailyReport, bool]:
    """
    Creates or updates the report for (store, date, shift).
    Returns the report and whether it was newly created. Does not commit.
    """
    report = DailyReport.query.filter_by(
        store_id=store_id,
        date=payload['date'],
        shift=payload['shift'],
    ).first()

    created = report is None
    if created:
        report = DailyReport(store_id=store_id, date=payload['date'], shift=payload['shift'])
        db.session.add(report)
    else:
        report.updated_at = datetime.utcnow()

    report.manager_id = manager_id
    for field, value in payload.items():
        if field in ('date', 'shift'):
            continue
        setattr(report, field, value)

    return report, created
