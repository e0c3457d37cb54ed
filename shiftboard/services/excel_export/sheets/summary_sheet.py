from shiftboard.services.excel_export.base_sheet import BaseSheet
from shiftboard.services.excel_export.utils.excel_utils import (
    HEADER_FONT, TITLE_FONT, BOLD_RED_FONT, HEADER_FILL, PAYMENT_FILL,
    MONEY_FORMAT, PERCENT_SUFFIX_FORMAT, auto_fit_columns
)

class SummarySheet(BaseSheet):
    def __init__(self, workbook, data):
        super().__init__(workbook, 'Summary', data)

    def generate(self):
        self._write_title()
        self._write_key_metrics()
        self._write_sales_breakdown()
        self._write_till_variance()
        auto_fit_columns(self.ws)

    def _write_title(self):
        self.ws['A1'] = 'Analytics Summary'
        self.ws['A1'].font = TITLE_FONT
        self.ws['A2'] = 'Period:'
        self.ws['B2'] = f"{self.data['start_date'].strftime('%Y-%m-%d')} to {self.data['end_date'].strftime('%Y-%m-%d')}"
        self.ws['A3'] = 'Stores:'
        self.ws['B3'] = ', '.join(store.name for store in self.data['stores'])

    def _write_key_metrics(self):
        summary = self.data['summary']
        trends = summary['trends']
        current_row = 5
        self.write_header_row(current_row, ['Metric', 'Value'], fill=HEADER_FILL)

        rows = [
            ('Total Reports', summary['total_reports'], None),
            ('Total Revenue', summary['total_revenue'], MONEY_FORMAT),
            ('Average Tips', summary['average_tips'], MONEY_FORMAT),
            ('Avg Prep Completion', summary['avg_prep_completion'], PERCENT_SUFFIX_FORMAT),
            ('Current Week Revenue', trends['current_week_revenue'], MONEY_FORMAT),
            ('Previous Week Revenue', trends['previous_week_revenue'], MONEY_FORMAT),
            ('Revenue Growth (%)', trends['revenue_growth'], '0.00'),
        ]
        for label, value, number_format in rows:
            current_row += 1
            self.ws.cell(row=current_row, column=1, value=label)
            cell = self.ws.cell(row=current_row, column=2, value=value)
            if number_format:
                cell.number_format = number_format

    def _write_sales_breakdown(self):
        breakdown = self.data['summary']['sales_breakdown']
        current_row = self.ws.max_row + 2
        title = self.ws.cell(row=current_row, column=1, value='Sales Breakdown')
        title.font = HEADER_FONT
        current_row += 1
        self.write_header_row(current_row, ['Method', 'Amount', 'Share'], fill=PAYMENT_FILL)

        for method, amount, share in (
            ('Cash', breakdown['cash'], breakdown['cash_percentage']),
            ('Card', breakdown['card'], breakdown['card_percentage']),
        ):
            current_row += 1
            self.ws.cell(row=current_row, column=1, value=method)
            self.ws.cell(row=current_row, column=2, value=amount).number_format = MONEY_FORMAT
            self.ws.cell(row=current_row, column=3, value=share).number_format = PERCENT_SUFFIX_FORMAT

    def _write_till_variance(self):
        variance = self.data['metrics']['till_variance']
        current_row = self.ws.max_row + 2
        self.ws.cell(row=current_row, column=1, value='Till Variance').font = HEADER_FONT
        rows = [
            ('Total Variance', variance['total_variance']),
            ('Average Variance', variance['average_variance']),
            ('Shortages', variance['shortages']),
            ('Overages', variance['overages']),
            ('Balanced', variance['balanced']),
        ]
        for label, value in rows:
            current_row += 1
            self.ws.cell(row=current_row, column=1, value=label)
            cell = self.ws.cell(row=current_row, column=2, value=value)
            if label.endswith('Variance'):
                cell.number_format = MONEY_FORMAT
                if value < 0:
                    cell.font = BOLD_RED_FONT
