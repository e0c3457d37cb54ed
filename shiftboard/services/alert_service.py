from typing import Dict, List

from shiftboard.services.report_record import ReportRecord

ALERT_LIMIT = 10
RECENT_REPORT_WINDOW = 50
LOW_PREP_THRESHOLD = 70

MISSING_REPORT = 'missing_report'
LOW_PREP = 'low_prep'


def missing_report_alerts(grid: List[Dict]) -> List[Dict]:
    alerts = []
    for entry in grid:
        for shift in ('morning', 'evening'):
            if entry[shift]['submitted']:
                continue
            alerts.append({
                'type': MISSING_REPORT,
                'severity': 'warning',
                'store_id': entry['store_id'],
                'store_name': entry['store_name'],
                'shift': shift,
                'message': f"Missing {shift} report for today",
            })
    return alerts


def low_prep_alerts(recent_reports: List[ReportRecord], threshold: int = LOW_PREP_THRESHOLD) -> List[Dict]:
    alerts = []
    for report in recent_reports[:RECENT_REPORT_WINDOW]:
        avg_prep = report.prep_score
        if avg_prep >= threshold:
            continue
        alerts.append({
            'type': LOW_PREP,
            'severity': 'error',
            'store_id': report.store_id,
            'store_name': report.store_name,
            'manager': report.manager_name,
            'date': report.date.strftime('%Y-%m-%d'),
            'message': f"Low prep completion: {round(avg_prep)}% on {report.date.strftime('%b %d')}",
        })
    return alerts


def generate_alerts(grid: List[Dict], recent_reports: List[ReportRecord],
                    threshold: int = LOW_PREP_THRESHOLD, limit: int = ALERT_LIMIT) -> List[Dict]:
    """
    Missing-report alerts first, then low-prep alerts, cut to `limit`.
    The cut drops the tail as-is; errors are not promoted over warnings.
    """
    alerts = missing_report_alerts(grid) + low_prep_alerts(recent_reports, threshold)
    return alerts[:limit]
