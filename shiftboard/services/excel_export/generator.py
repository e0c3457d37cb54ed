from io import BytesIO
from openpyxl import Workbook

from shiftboard.services.analytics_service import build_store_metrics, build_summary
from shiftboard.services.excel_export.sheets.summary_sheet import SummarySheet
from shiftboard.services.excel_export.sheets.daily_revenue_sheet import DailyRevenueSheet
from shiftboard.services.excel_export.sheets.manager_sheet import ManagerSheet
from shiftboard.services.excel_export.sheets.prep_task_sheet import PrepTaskSheet

class AnalyticsWorkbookGenerator:
    def __init__(self, stores, reports, start_date, end_date, today_reports: int = 0):
        self.stores = stores
        self.reports = reports
        self.start_date = start_date
        self.end_date = end_date
        self.today_reports = today_reports
        self.wb = Workbook()
        self.wb.remove(self.wb.active)  # Remove default sheet

    def _collect_data(self) -> dict:
        summary = build_summary(
            self.reports,
            self.end_date,
            today_reports=self.today_reports,
            store_count=len(self.stores),
        )
        metrics = build_store_metrics(self.reports, self.end_date)
        return {
            'stores': self.stores,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'summary': summary,
            'metrics': metrics,
        }

    def generate_report(self) -> BytesIO:
        """
        Builds the analytics workbook and returns it as a rewound byte stream.
        """
        data = self._collect_data()

        for sheet_class in (SummarySheet, DailyRevenueSheet, ManagerSheet, PrepTaskSheet):
            sheet_class(self.wb, data).generate()

        excel_file = BytesIO()
        self.wb.save(excel_file)
        excel_file.seek(0)

        return excel_file
