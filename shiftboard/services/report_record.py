from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional

from shiftboard.models.daily_report import PREP_TASKS


def _num(value) -> float:
    return float(value) if value is not None else 0.0


@dataclass
class ReportRecord:
    """
    A daily report resolved into plain numbers.

    Nullable columns are coerced to zero here, once, so the analytics
    functions never re-check for missing values.
    """
    id: Optional[int]
    store_id: int
    store_name: str
    manager_id: int
    manager_name: str
    manager_email: Optional[str]
    date: date
    shift: str
    starting_amount: float = 0.0
    ending_amount: float = 0.0
    total_sales: float = 0.0
    cash_sales: float = 0.0
    card_sales: float = 0.0
    tip_amount: float = 0.0
    cash_tips: float = 0.0
    customer_count: int = 0
    morning_prep_completed: int = 0
    evening_prep_completed: int = 0
    prep_tasks: Dict[str, bool] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    @property
    def prep_score(self) -> float:
        return (self.morning_prep_completed + self.evening_prep_completed) / 2

    @classmethod
    def from_model(cls, report) -> 'ReportRecord':
        store = report.store
        manager = report.manager
        return cls(
            id=report.id,
            store_id=report.store_id,
            store_name=store.name if store else '',
            manager_id=report.manager_id,
            manager_name=manager.name if manager else '',
            manager_email=manager.email if manager else None,
            date=report.date,
            shift=report.shift,
            starting_amount=_num(report.starting_amount),
            ending_amount=_num(report.ending_amount),
            total_sales=_num(report.total_sales),
            cash_sales=_num(report.cash_sales),
            card_sales=_num(report.card_sales),
            tip_amount=_num(report.tip_amount),
            cash_tips=_num(report.cash_tips),
            customer_count=report.customer_count or 0,
            morning_prep_completed=report.morning_prep_completed or 0,
            evening_prep_completed=report.evening_prep_completed or 0,
            prep_tasks={key: bool(getattr(report, key)) for key, _label in PREP_TASKS},
            created_at=report.created_at,
        )
