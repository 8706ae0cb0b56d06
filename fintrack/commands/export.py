"""Export commands: PDF and spreadsheet downloads, and emailed PDF."""

from datetime import datetime
from pathlib import Path

from rich.markup import escape

from fintrack.commands.context import console, fail, load_context
from fintrack.errors import FintrackError
from fintrack.reports import PDF_FILENAME, XLSX_FILENAME, build_pdf_report, build_xlsx_report, write_artifact
from fintrack.reports.mail import send_pdf_report
from fintrack.store import TransactionStore

EXPORT_KINDS = ("pdf", "xlsx", "mail")


def export_command(kind: str, output: str | None = None) -> None:
    """Export a report of all transactions.

    Reports always cover the full transaction list, fetched fresh, whatever
    filters were used when listing.

    Args:
        kind: "pdf", "xlsx" or "mail".
        output: Output file path (pdf/xlsx only); defaults to report_dir.
    """
    if kind not in EXPORT_KINDS:
        fail(f"Unknown export '{kind}' (choose from {', '.join(EXPORT_KINDS)})")

    ctx = load_context()
    store = TransactionStore()
    try:
        transactions = store.refresh(ctx.repository)
    except FintrackError as e:
        fail(e)

    generated_at = datetime.now()

    try:
        if kind == "mail":
            pdf_bytes = build_pdf_report(transactions, generated_at, ctx.currency)
            message = send_pdf_report(ctx.mailer, pdf_bytes)
            console.print(f"[green]✓[/green] {escape(message)}")
            return

        if kind == "pdf":
            content = build_pdf_report(transactions, generated_at, ctx.currency)
            default_name = PDF_FILENAME
        else:
            content = build_xlsx_report(transactions, generated_at, ctx.currency)
            default_name = XLSX_FILENAME

        target = Path(output) if output else Path(str(ctx.config["report_dir"])) / default_name
        written = write_artifact(target, content)
    except FintrackError as e:
        fail(e)

    console.print(f"[green]✓[/green] Report saved to: {escape(str(written))}")
    console.print(f"[dim]{len(transactions)} transactions[/dim]")
