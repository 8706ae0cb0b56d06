"""Spreadsheet transaction report, built with openpyxl."""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from fintrack.domain.models import Money, TransactionType, to_units
from fintrack.domain.report import ReportData, ReportSection
from fintrack.domain.transactions import format_money, sign_marker

HEADERS = ("Amount", "Category", "Date", "Description")
LAST_COLUMN = get_column_letter(len(HEADERS))
SHEET_TITLE = "Transactions"

# ARGB font colours
FONT_COLOURS = {
    "green": "FF008000",
    "red": "FFCC0000",
}
HEADER_FILL = PatternFill(fill_type="solid", start_color="FFD9E1F2", end_color="FFD9E1F2")
MIN_COLUMN_WIDTH = 10


def amount_format(currency: str, signed: bool) -> str:
    """Excel number format showing the currency and, if signed, a +/- sign."""
    prefix = f'"{currency} "' if currency else ""
    if signed:
        return f'"+"{prefix}#,##0.00;"-"{prefix}#,##0.00'
    return f"{prefix}#,##0.00"


def type_colour(transaction_type: TransactionType) -> str:
    return "green" if transaction_type == TransactionType.INCOME else "red"


def write_amount(
    cell: Cell,
    amount: Money,
    colour: str,
    currency: str,
    signed: bool,
    bold: bool = False,
) -> None:
    cell.value = to_units(amount)
    cell.number_format = amount_format(currency, signed)
    cell.font = Font(color=FONT_COLOURS[colour], bold=bold)
    cell.alignment = Alignment(horizontal="right")


def write_totals(ws: Worksheet, row: int, data: ReportData, currency: str) -> int:
    """Write the three totals lines; the value cells span columns B to D."""
    _, balance_colour = sign_marker(data.totals.total_balance)
    lines = (
        ("Total Income", data.totals.total_income, "green", False),
        ("Total Expense", data.totals.total_expense, "red", False),
        ("Total Balance", data.totals.total_balance, balance_colour, True),
    )
    for caption, amount, colour, signed in lines:
        ws.cell(row=row, column=1, value=caption).font = Font(bold=True)
        write_amount(ws.cell(row=row, column=2), amount, colour, currency, signed, bold=True)
        ws.merge_cells(f"B{row}:{LAST_COLUMN}{row}")
        row += 1
    return row


def write_section(ws: Worksheet, row: int, section: ReportSection, currency: str) -> int:
    """Write one month bucket: heading, column headers and rows."""
    ws.cell(row=row, column=1, value=section.label).font = Font(bold=True, size=12)
    ws.merge_cells(f"A{row}:B{row}")
    ws.cell(row=row, column=3, value="Balance").font = Font(bold=True)
    _, colour = sign_marker(section.totals.total_balance)
    write_amount(ws.cell(row=row, column=4), section.totals.total_balance, colour, currency, signed=True, bold=True)
    row += 1

    for column, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=row, column=column, value=header)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
    row += 1

    for report_row in section.rows:
        colour = type_colour(report_row.transaction_type)
        write_amount(ws.cell(row=row, column=1), report_row.amount, colour, currency, signed=True)
        for column, value in enumerate((report_row.category, report_row.date, report_row.description), 2):
            cell = ws.cell(row=row, column=column, value=value)
            # Plain text even when it starts with "="
            cell.data_type = "s"
            cell.font = Font(color=FONT_COLOURS[colour])
        row += 1

    return row + 1


def autosize_columns(ws: Worksheet, currency: str) -> None:
    """Size each column to its longest unmerged value."""
    merged = {cell for rng in ws.merged_cells.ranges for cell in rng.cells}
    widths: dict[int, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None or (cell.row, cell.column) in merged:
                continue
            if cell.number_format.endswith("0.00"):
                text = format_money(Money(int(cell.value * 100)), currency, include_sign=True)
            else:
                text = str(cell.value)
            widths[cell.column] = max(widths.get(cell.column, 0), len(text))

    for column in range(1, len(HEADERS) + 1):
        width = max(widths.get(column, 0) + 2, MIN_COLUMN_WIDTH)
        ws.column_dimensions[get_column_letter(column)].width = width


def render_xlsx(data: ReportData, currency: str = "Rs.") -> bytes:
    """Render report data as an .xlsx workbook.

    Args:
        data: Report data with sections in the spreadsheet bucket order.
        currency: Currency prefix for amounts.

    Returns:
        Workbook file contents.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws["A1"] = data.title
    ws["A1"].font = Font(bold=True, size=16)
    ws["A1"].alignment = Alignment(horizontal="center")
    ws.merge_cells(f"A1:{LAST_COLUMN}1")

    ws["A2"] = f"Generated on {data.generated_at}"
    ws["A2"].font = Font(italic=True, color="FF666666")
    ws["A2"].alignment = Alignment(horizontal="center")
    ws.merge_cells(f"A2:{LAST_COLUMN}2")

    row = write_totals(ws, 4, data, currency) + 1

    if not data.sections:
        ws.cell(row=row, column=1, value="No transactions recorded.")
        ws.merge_cells(f"A{row}:{LAST_COLUMN}{row}")

    for section in data.sections:
        row = write_section(ws, row, section, currency)

    autosize_columns(ws, currency)

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
