"""
Aggregations over normalized daily reports.

Every function here is pure: callers fetch and scope the reports, these
functions only reduce them. Any average or ratio whose denominator is zero
is reported as 0.
"""
from datetime import date
from typing import Dict, Iterable, List, Optional

from shiftboard.models.daily_report import PREP_TASKS, MORNING, EVENING, BOTH
from shiftboard.services.report_record import ReportRecord
from shiftboard.services.trend_service import week_over_week, revenue_by_day, sorted_revenue_by_day

PREP_TASK_KEYS = tuple(key for key, _label in PREP_TASKS)
PREP_TASK_LABELS = dict(PREP_TASKS)


def _ratio(numerator, denominator):
    return numerator / denominator if denominator else 0


def _percentage(part, whole) -> int:
    return round(100 * part / whole) if whole else 0


def total_revenue(reports: List[ReportRecord]) -> float:
    return sum(r.total_sales for r in reports)


def average_tips(reports: List[ReportRecord]) -> float:
    return _ratio(sum(r.tip_amount for r in reports), len(reports))


def avg_prep_completion(reports: List[ReportRecord]) -> int:
    if not reports:
        return 0
    return round(sum(r.prep_score for r in reports) / len(reports))


def sales_breakdown(reports: List[ReportRecord]) -> Dict:
    revenue = total_revenue(reports)
    cash = sum(r.cash_sales for r in reports)
    card = sum(r.card_sales for r in reports)
    return {
        'cash': cash,
        'card': card,
        'cash_percentage': _percentage(cash, revenue) if revenue > 0 else 0,
        'card_percentage': _percentage(card, revenue) if revenue > 0 else 0,
    }


def till_variance(report: ReportRecord) -> float:
    """Ending minus starting till. Negative is a shortage, positive an overage."""
    return report.ending_amount - report.starting_amount


def till_variance_summary(reports: List[ReportRecord]) -> Dict:
    variances = [till_variance(r) for r in reports]
    total = sum(variances)
    return {
        'total_variance': round(total, 2),
        'average_variance': round(_ratio(total, len(variances)), 2),
        'shortages': sum(1 for v in variances if v < 0),
        'overages': sum(1 for v in variances if v > 0),
        'balanced': sum(1 for v in variances if v == 0),
    }


def prep_task_completion(reports: List[ReportRecord], task_keys: Iterable[str] = PREP_TASK_KEYS) -> List[Dict]:
    total = len(reports)
    tasks = []
    for key in task_keys:
        completed = sum(1 for r in reports if r.prep_tasks.get(key))
        tasks.append({
            'task': key,
            'label': PREP_TASK_LABELS.get(key, key),
            'completed': completed,
            'total': total,
            'percentage': _percentage(completed, total),
        })
    return tasks


def manager_stats(reports: List[ReportRecord]) -> List[Dict]:
    """Per-manager rollup, emitted in order of each manager's first report."""
    groups = {}
    for report in reports:
        group = groups.get(report.manager_id)
        if group is None:
            group = groups[report.manager_id] = {
                'manager_id': report.manager_id,
                'name': report.manager_name,
                'email': report.manager_email,
                'reports_count': 0,
                'total_revenue': 0.0,
                '_prep_sum': 0.0,
            }
        group['reports_count'] += 1
        group['total_revenue'] += report.total_sales
        group['_prep_sum'] += report.prep_score

    stats = []
    for group in groups.values():
        prep_sum = group.pop('_prep_sum')
        group['avg_prep_completion'] = round(_ratio(prep_sum, group['reports_count']))
        stats.append(group)
    return stats


def _shift_bucket(reports: List[ReportRecord], prep_field: str) -> Dict:
    count = len(reports)
    return {
        'count': count,
        'avg_revenue': round(_ratio(sum(r.total_sales for r in reports), count), 2),
        'avg_prep_completion': round(_ratio(sum(getattr(r, prep_field) for r in reports), count)),
    }


def shift_comparison(reports: List[ReportRecord]) -> Dict:
    """Morning vs evening performance. A BOTH report counts toward each shift."""
    morning = [r for r in reports if r.shift in (MORNING, BOTH)]
    evening = [r for r in reports if r.shift in (EVENING, BOTH)]
    return {
        'morning': _shift_bucket(morning, 'morning_prep_completed'),
        'evening': _shift_bucket(evening, 'evening_prep_completed'),
    }


def build_summary(reports: List[ReportRecord], reference_date: date,
                  today_reports: int = 0, include_stores: bool = False,
                  store_count: Optional[int] = None) -> Dict:
    """The analytics dashboard payload for one or many stores."""
    return {
        'today_reports': today_reports,
        'total_reports': len(reports),
        'total_revenue': total_revenue(reports),
        'average_tips': average_tips(reports),
        'avg_prep_completion': avg_prep_completion(reports),
        'trends': week_over_week(reports, reference_date),
        'sales_breakdown': sales_breakdown(reports),
        'revenue_by_day': revenue_by_day(reports, include_stores=include_stores),
        'is_all_stores': include_stores,
        'store_count': store_count,
    }


def build_store_metrics(reports: List[ReportRecord], reference_date: date) -> Dict:
    return {
        'total_reports': len(reports),
        'summary': {
            'total_revenue': total_revenue(reports),
            'avg_tips': average_tips(reports),
            'avg_prep_completion': avg_prep_completion(reports),
        },
        'trends': week_over_week(reports, reference_date),
        'revenue_trends': sorted_revenue_by_day(reports),
        'shift_comparison': shift_comparison(reports),
        'prep_completion': prep_task_completion(reports),
        'manager_stats': manager_stats(reports),
        'till_variance': till_variance_summary(reports),
    }
