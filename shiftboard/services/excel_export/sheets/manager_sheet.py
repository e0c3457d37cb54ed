from shiftboard.services.excel_export.base_sheet import BaseSheet
from shiftboard.services.excel_export.utils.excel_utils import (
    HEADER_FILL, LOW_PREP_FILL, MONEY_FORMAT, PERCENT_SUFFIX_FORMAT, auto_fit_columns
)
from shiftboard.services.alert_service import LOW_PREP_THRESHOLD

class ManagerSheet(BaseSheet):
    HEADERS = ['Manager', 'Email', 'Reports', 'Total Revenue', 'Avg Prep Completion']

    def __init__(self, workbook, data):
        super().__init__(workbook, 'Managers', data)

    def generate(self):
        self.write_header_row(1, self.HEADERS, fill=HEADER_FILL)

        for row, stats in enumerate(self.data['metrics']['manager_stats'], 2):
            self.ws.cell(row=row, column=1, value=stats['name'])
            self.ws.cell(row=row, column=2, value=stats['email'])
            self.ws.cell(row=row, column=3, value=stats['reports_count'])
            self.ws.cell(row=row, column=4, value=stats['total_revenue']).number_format = MONEY_FORMAT
            prep_cell = self.ws.cell(row=row, column=5, value=stats['avg_prep_completion'])
            prep_cell.number_format = PERCENT_SUFFIX_FORMAT
            if stats['avg_prep_completion'] < LOW_PREP_THRESHOLD:
                prep_cell.fill = LOW_PREP_FILL

        auto_fit_columns(self.ws)
