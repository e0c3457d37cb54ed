from datetime import date, datetime
from typing import Dict, List
from zoneinfo import ZoneInfo

from shiftboard.models.daily_report import MORNING, EVENING, BOTH
from shiftboard.services.report_record import ReportRecord

MORNING_SHIFTS = (MORNING, BOTH)
EVENING_SHIFTS = (EVENING, BOTH)


def business_today(tz_name: str = 'UTC', now: datetime = None) -> date:
    """
    The current business date in the reporting timezone. Compute it once per
    request and pass it around so every store sees the same day.
    """
    tz = ZoneInfo(tz_name)
    now = now.astimezone(tz) if now else datetime.now(tz)
    return now.date()


def _shift_status(reports: List[ReportRecord], shifts) -> Dict:
    submitted = next((r for r in reports if r.shift in shifts), None)
    return {
        'submitted': submitted is not None,
        'manager': submitted.manager_name if submitted else None,
    }


def build_status_grid(stores, todays_reports: List[ReportRecord], today: date = None) -> List[Dict]:
    """
    One entry per store, even when the store has no report today.
    When today is given, reports from other dates are ignored.
    """
    by_store = {}
    for report in todays_reports:
        if today is not None and report.date != today:
            continue
        by_store.setdefault(report.store_id, []).append(report)

    grid = []
    for store in stores:
        store_reports = by_store.get(store.id, [])
        grid.append({
            'store_id': store.id,
            'store_name': store.name,
            'morning': _shift_status(store_reports, MORNING_SHIFTS),
            'evening': _shift_status(store_reports, EVENING_SHIFTS),
        })
    return grid


def completion_stats(grid: List[Dict]) -> Dict:
    total = len(grid) * 2
    completed = sum(int(entry['morning']['submitted']) + int(entry['evening']['submitted']) for entry in grid)
    return {
        'completed': completed,
        'total': total,
        'percentage': round(completed / total * 100) if total else 0,
    }
