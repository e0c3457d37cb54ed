from abc import ABC, abstractmethod
from openpyxl.workbook import Workbook

from shiftboard.services.excel_export.utils.excel_utils import HEADER_FONT, THIN_BORDER

class BaseSheet(ABC):
    def __init__(self, workbook: Workbook, sheet_name: str, data: dict):
        self.wb = workbook
        self.sheet_name = sheet_name
        self.data = data
        self.ws = self.wb.create_sheet(title=self.sheet_name)

    @abstractmethod
    def generate(self):
        """Writes this sheet's content from self.data."""
        pass

    def write_header_row(self, row: int, headers: list, fill=None):
        for col, header in enumerate(headers, 1):
            cell = self.ws.cell(row=row, column=col, value=header)
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER
            if fill is not None:
                cell.fill = fill
