"""Paginated PDF transaction report, drawn with PyMuPDF."""

import fitz  # PyMuPDF

from fintrack.domain.report import ReportData, ReportRow, ReportSection, Totals
from fintrack.domain.transactions import format_money, sign_marker

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 40
ROW_HEIGHT = 16
# Base-14 Helvetica; characters it lacks fall back to the bundled Noto fonts
FONTS = {
    False: fitz.Font("helv"),
    True: fitz.Font("hebo"),
}
FONT_SIZE = 9

# (header, width in points); widths are fixed so every page lines up
COLUMNS: tuple[tuple[str, float], ...] = (
    ("Amount", 110),
    ("Category", 100),
    ("Date", 80),
    ("Description", PAGE_WIDTH - 2 * MARGIN - 290),
)

COLOURS = {
    "green": (0.0, 0.5, 0.0),
    "red": (0.8, 0.0, 0.0),
    "black": (0.0, 0.0, 0.0),
    "grey": (0.4, 0.4, 0.4),
    "band": (0.85, 0.88, 0.92),
}


def fit_text(text: str, width: float, fontsize: float = FONT_SIZE, bold: bool = False) -> str:
    """Collapse line breaks and truncate text with "..." so it fits in a column."""
    font = FONTS[bold]
    text = " ".join(text.split())
    if font.text_length(text, fontsize=fontsize) <= width:
        return text
    while text and font.text_length(text + "...", fontsize=fontsize) > width:
        text = text[:-1]
    return text + "..."


def write_text(
    page: fitz.Page,
    pos: tuple[float, float],
    text: str,
    fontsize: float = FONT_SIZE,
    bold: bool = False,
    colour: str = "black",
) -> None:
    writer = fitz.TextWriter(page.rect, color=COLOURS[colour])
    writer.append(pos, text, font=FONTS[bold], fontsize=fontsize)
    writer.write_text(page)


class PdfCanvas:
    """Tracks the write position and starts new pages as rows run out."""

    def __init__(self, doc: fitz.Document) -> None:
        self.doc = doc
        self.page: fitz.Page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN
        self.in_table = False

    def text(
        self,
        x: float,
        text: str,
        fontsize: float = FONT_SIZE,
        bold: bool = False,
        colour: str = "black",
    ) -> None:
        write_text(self.page, (x, self.y), text, fontsize, bold, colour)

    def new_page(self) -> None:
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN
        if self.in_table:
            self.header_band()

    def ensure_space(self, height: float) -> None:
        if self.y + height > PAGE_HEIGHT - MARGIN:
            self.new_page()

    def header_band(self) -> None:
        """Draw the shaded column header row."""
        band = fitz.Rect(MARGIN, self.y, PAGE_WIDTH - MARGIN, self.y + ROW_HEIGHT)
        self.page.draw_rect(band, color=None, fill=COLOURS["band"], width=0)
        self.y += ROW_HEIGHT - 4
        x = MARGIN + 4
        for header, width in COLUMNS:
            self.text(x, header, bold=True)
            x += width
        self.y += ROW_HEIGHT

    def row(self, row: ReportRow, currency: str) -> None:
        self.ensure_space(ROW_HEIGHT)
        _, colour = sign_marker(row.amount)
        cells = (
            (format_money(row.amount, currency, include_sign=True), colour),
            (row.category, "black"),
            (row.date, "black"),
            (row.description, "black"),
        )
        x = MARGIN + 4
        for (value, cell_colour), (_, width) in zip(cells, COLUMNS):
            self.text(x, fit_text(value, width - 8), colour=cell_colour)
            x += width
        self.y += ROW_HEIGHT


def draw_totals(canvas: PdfCanvas, totals: Totals, currency: str) -> None:
    _, colour = sign_marker(totals.total_balance)
    lines = (
        ("Total Income:", format_money(totals.total_income, currency), "green"),
        ("Total Expense:", format_money(totals.total_expense, currency), "red"),
        ("Total Balance:", format_money(totals.total_balance, currency, include_sign=True), colour),
    )
    for caption, value, value_colour in lines:
        canvas.text(MARGIN, caption, fontsize=11, bold=True)
        canvas.text(MARGIN + 110, value, fontsize=11, colour=value_colour)
        canvas.y += 16


def draw_section(canvas: PdfCanvas, section: ReportSection, currency: str) -> None:
    # Keep the heading together with the header band and at least one row
    canvas.ensure_space(28 + 2 * ROW_HEIGHT)
    canvas.text(MARGIN, section.label, fontsize=13, bold=True)
    _, colour = sign_marker(section.totals.total_balance)
    balance = format_money(section.totals.total_balance, currency, include_sign=True)
    canvas.text(PAGE_WIDTH - MARGIN - 160, f"Balance: {balance}", fontsize=10, colour=colour)
    canvas.y += 12

    canvas.header_band()
    canvas.in_table = True
    for row in section.rows:
        canvas.row(row, currency)
    canvas.in_table = False
    canvas.y += 14


def render_pdf(data: ReportData, currency: str = "Rs.") -> bytes:
    """Render report data as a PDF document.

    Args:
        data: Report data with sections in the PDF bucket order.
        currency: Currency prefix for amounts.

    Returns:
        PDF file contents.
    """
    doc = fitz.open()
    try:
        doc.set_metadata({"title": data.title, "creator": "fintrack"})
        canvas = PdfCanvas(doc)

        canvas.y += 20
        canvas.text(MARGIN, data.title, fontsize=18, bold=True)
        canvas.y += 18
        canvas.text(MARGIN, f"Generated on {data.generated_at}", fontsize=10, colour="grey")
        canvas.y += 26

        draw_totals(canvas, data.totals, currency)
        canvas.y += 14

        if not data.sections:
            canvas.text(MARGIN, "No transactions recorded.", fontsize=11, colour="grey")

        for section in data.sections:
            draw_section(canvas, section, currency)

        page_count = doc.page_count
        for number, page in enumerate(doc, 1):
            write_text(
                page,
                (PAGE_WIDTH - MARGIN - 60, PAGE_HEIGHT - MARGIN / 2),
                f"Page {number} of {page_count}",
                fontsize=8,
                colour="grey",
            )

        return doc.tobytes()
    finally:
        doc.close()

