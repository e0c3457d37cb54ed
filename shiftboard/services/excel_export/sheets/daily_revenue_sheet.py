from shiftboard.services.excel_export.base_sheet import BaseSheet
from shiftboard.services.excel_export.utils.excel_utils import (
    DATE_FILL, HEADER_FILL, MONEY_FORMAT, auto_fit_columns
)

class DailyRevenueSheet(BaseSheet):
    HEADERS = ['Date', 'Revenue', 'Tips', 'Customers', 'Reports']

    def __init__(self, workbook, data):
        super().__init__(workbook, 'Daily Revenue', data)

    def generate(self):
        self.write_header_row(1, self.HEADERS, fill=HEADER_FILL)

        days = self.data['metrics']['revenue_trends']
        for row, day in enumerate(days, 2):
            self.ws.cell(row=row, column=1, value=day['date']).fill = DATE_FILL
            self.ws.cell(row=row, column=2, value=day['revenue']).number_format = MONEY_FORMAT
            self.ws.cell(row=row, column=3, value=day['tips']).number_format = MONEY_FORMAT
            self.ws.cell(row=row, column=4, value=day['customers'])
            self.ws.cell(row=row, column=5, value=day['reports'])

        self.ws.freeze_panes = 'A2'
        auto_fit_columns(self.ws)
