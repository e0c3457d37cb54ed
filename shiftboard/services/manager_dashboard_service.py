from datetime import date
from typing import Dict, List

from shiftboard.models.daily_report import MORNING
from shiftboard.services.report_record import ReportRecord
from shiftboard.services.trend_service import split_weeks

SHIFTS_PER_DAY = 2
DAYS_PER_WEEK = 7
REPORTS_PER_STORE = 7


def shift_prep_completion(report: ReportRecord) -> int:
    """Completion for the shift the report covers; BOTH and EVENING read the evening score."""
    return report.morning_prep_completed if report.shift == MORNING else report.evening_prep_completed


def _average_shift_prep(reports: List[ReportRecord]) -> float:
    if not reports:
        return 0
    return round(sum(shift_prep_completion(r) for r in reports) / len(reports), 1)


def weekly_stats(store_count: int, reports: List[ReportRecord], reference_date: date) -> Dict:
    current_week, _previous = split_weeks(reports, reference_date)
    expected = store_count * SHIFTS_PER_DAY * DAYS_PER_WEEK
    return {
        'total_reports': len(current_week),
        'avg_prep_completion': _average_shift_prep(current_week),
        'expected_reports': expected,
        'missed_shifts': max(0, expected - len(current_week)),
    }


def build_manager_dashboard(assignments, recent_reports: List[ReportRecord],
                            week_reports: List[ReportRecord], reference_date: date) -> Dict:
    stores = []
    for assignment in assignments:
        store = assignment.store
        store_reports = sorted(
            (r for r in recent_reports if r.store_id == store.id),
            key=lambda r: r.date, reverse=True
        )
        stores.append({
            'id': store.id,
            'name': store.name,
            'address': store.address,
            'is_active': store.is_active,
            'recent_reports': [
                {
                    'id': r.id,
                    'date': r.date.strftime('%Y-%m-%d'),
                    'shift': r.shift,
                    'total_sales': r.total_sales,
                    'prep_completion': shift_prep_completion(r),
                }
                for r in store_reports[:REPORTS_PER_STORE]
            ],
            'completion_rate': _average_shift_prep(store_reports),
            'last_report_date': store_reports[0].date.strftime('%Y-%m-%d') if store_reports else None,
            'assigned_at': assignment.created_at.isoformat() if assignment.created_at else None,
        })

    return {
        'stores': stores,
        'weekly_stats': weekly_stats(len(assignments), week_reports, reference_date),
        'total_reports': len(recent_reports),
    }
