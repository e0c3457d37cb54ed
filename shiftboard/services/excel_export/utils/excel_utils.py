from openpyxl.styles import Font, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

# Fonts
HEADER_FONT = Font(bold=True)
TITLE_FONT = Font(bold=True, size=14)
BOLD_RED_FONT = Font(bold=True, color='FF0000')

# Fills
HEADER_FILL = PatternFill(start_color='CCCCCC', end_color='CCCCCC', fill_type='solid')
PAYMENT_FILL = PatternFill(start_color='ADD8E6', end_color='ADD8E6', fill_type='solid')
LOW_PREP_FILL = PatternFill(start_color='F4CCCC', end_color='F4CCCC', fill_type='solid')
COMPLETED_FILL = PatternFill(start_color='C6EFCE', end_color='C6EFCE', fill_type='solid')
DATE_FILL = PatternFill(start_color='C9F0FF', end_color='C9F0FF', fill_type='solid')

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)

MONEY_FORMAT = '#,##0.00'
# Values are stored as 0-100, not as fractions
PERCENT_SUFFIX_FORMAT = '0"%"'

MAX_COLUMN_WIDTH = 60


def auto_fit_columns(ws):
    """Sizes each column to its longest rendered value, capped at MAX_COLUMN_WIDTH."""
    for col in ws.columns:
        column = get_column_letter(col[0].column)
        longest = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
        ws.column_dimensions[column].width = min(longest + 2, MAX_COLUMN_WIDTH)
