from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Tuple

from shiftboard.services.report_record import ReportRecord

WEEK = timedelta(days=7)


def split_weeks(reports: List[ReportRecord], reference_date: date) -> Tuple[List[ReportRecord], List[ReportRecord]]:
    """
    Partitions reports into the rolling week ending on reference_date and the
    week before it. Windows are (ref - 7, ref] and (ref - 14, ref - 7] on the
    report's business date.
    """
    current_start = reference_date - WEEK
    previous_start = current_start - WEEK

    current_week = [r for r in reports if current_start < r.date <= reference_date]
    previous_week = [r for r in reports if previous_start < r.date <= current_start]
    return current_week, previous_week


def week_over_week(reports: List[ReportRecord], reference_date: date) -> Dict:
    current_week, previous_week = split_weeks(reports, reference_date)
    current_revenue = sum(r.total_sales for r in current_week)
    previous_revenue = sum(r.total_sales for r in previous_week)

    # Growth off a zero base is reported as flat
    if previous_revenue > 0:
        growth = round((current_revenue - previous_revenue) / previous_revenue * 100, 2)
    else:
        growth = 0

    return {
        'revenue_growth': growth,
        'current_week_revenue': current_revenue,
        'previous_week_revenue': previous_revenue,
    }


def revenue_by_day(reports: List[ReportRecord], include_stores: bool = False) -> List[Dict]:
    """Buckets reports per ISO date. Buckets come out in first-seen order."""
    buckets = {}
    for report in reports:
        date_key = report.date.strftime('%Y-%m-%d')
        bucket = buckets.get(date_key)
        if bucket is None:
            bucket = {'date': date_key, 'revenue': 0.0, 'tips': 0.0, 'customers': 0, 'reports': 0}
            if include_stores:
                bucket['stores'] = defaultdict(lambda: {'revenue': 0.0, 'reports': 0})
            buckets[date_key] = bucket

        bucket['revenue'] += report.total_sales
        bucket['tips'] += report.tip_amount
        bucket['customers'] += report.customer_count
        bucket['reports'] += 1

        if include_stores:
            store_bucket = bucket['stores'][report.store_name]
            store_bucket['revenue'] += report.total_sales
            store_bucket['reports'] += 1

    days = list(buckets.values())
    if include_stores:
        for bucket in days:
            bucket['stores'] = dict(bucket['stores'])
    return days


def sorted_revenue_by_day(reports: List[ReportRecord], include_stores: bool = False) -> List[Dict]:
    # ISO keys are fixed width so string order is date order
    return sorted(revenue_by_day(reports, include_stores), key=lambda bucket: bucket['date'])
