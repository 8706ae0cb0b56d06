"""Report generation: PDF and spreadsheet renderers plus file output.

Both renderers take the same ReportData; each orders its month sections
differently (PDF by amount, spreadsheet by date, both descending).
"""

import os
import tempfile
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from fintrack.domain.models import Transaction
from fintrack.domain.report import PDF_ORDERING, XLSX_ORDERING, ReportData, build_report_data
from fintrack.errors import ExportError
from fintrack.logging_setup import get_logger
from fintrack.reports.pdf import render_pdf
from fintrack.reports.xlsx import render_xlsx

logger = get_logger(__name__)

PDF_FILENAME = "transactions_report.pdf"
XLSX_FILENAME = "transactions_report.xlsx"


def _render(
    renderer: Callable[[ReportData, str], bytes],
    data: ReportData,
    currency: str,
) -> bytes:
    try:
        return renderer(data, currency)
    except Exception as e:
        # Renderer libraries raise their own exception types
        raise ExportError(f"Could not render report: {e}") from e


def build_pdf_report(
    transactions: Iterable[Transaction],
    generated_at: datetime,
    currency: str = "Rs.",
) -> bytes:
    """Render the PDF report for a transaction set.

    Raises:
        ExportError: If rendering fails.
    """
    data = build_report_data(transactions, PDF_ORDERING, generated_at)
    return _render(render_pdf, data, currency)


def build_xlsx_report(
    transactions: Iterable[Transaction],
    generated_at: datetime,
    currency: str = "Rs.",
) -> bytes:
    """Render the spreadsheet report for a transaction set.

    Raises:
        ExportError: If rendering fails.
    """
    data = build_report_data(transactions, XLSX_ORDERING, generated_at)
    return _render(render_xlsx, data, currency)


def write_artifact(path: Path, content: bytes) -> Path:
    """Write a rendered report, replacing the target only when complete.

    Content goes to a temporary file in the same directory first, so an
    interrupted write never leaves a partial report at ``path``.

    Raises:
        ExportError: If the file cannot be written.
    """
    path = path.expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            os.unlink(tmp_name)
            raise
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e

    logger.info("Wrote %s (%d bytes)", path, len(content))
    return path
