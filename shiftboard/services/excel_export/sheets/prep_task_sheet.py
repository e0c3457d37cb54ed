from shiftboard.services.excel_export.base_sheet import BaseSheet
from shiftboard.services.excel_export.utils.excel_utils import (
    HEADER_FILL, COMPLETED_FILL, PERCENT_SUFFIX_FORMAT, auto_fit_columns
)

class PrepTaskSheet(BaseSheet):
    HEADERS = ['Task', 'Completed', 'Total', 'Completion']

    def __init__(self, workbook, data):
        super().__init__(workbook, 'Prep Tasks', data)

    def generate(self):
        self.write_header_row(1, self.HEADERS, fill=HEADER_FILL)

        for row, task in enumerate(self.data['metrics']['prep_completion'], 2):
            self.ws.cell(row=row, column=1, value=task['label'])
            self.ws.cell(row=row, column=2, value=task['completed'])
            self.ws.cell(row=row, column=3, value=task['total'])
            cell = self.ws.cell(row=row, column=4, value=task['percentage'])
            cell.number_format = PERCENT_SUFFIX_FORMAT
            if task['percentage'] == 100:
                cell.fill = COMPLETED_FILL

        auto_fit_columns(self.ws)
