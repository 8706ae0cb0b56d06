"""CLI entry point for fintrack."""

import typer

from fintrack.commands.admin import init_command
from fintrack.commands.auth import login_command, logout_command, register_command
from fintrack.commands.export import export_command
from fintrack.commands.report import chart_command, summary_command
from fintrack.commands.transactions import add_command, delete_command, list_command, update_command
from fintrack.config import load_config
from fintrack.logging_setup import configure_logging

app = typer.Typer(
    name="fintrack",
    help="Track your income and expenses and export reports",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Track your income and expenses and export reports."""
    level = "DEBUG" if verbose else load_config().get("log_level")
    configure_logging(level)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create the fintrack configuration file."""
    init_command(force)


@app.command()
def register(
    name: str,
    email: str,
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Create an account."""
    register_command(name, email, password)


@app.command()
def login(
    email: str,
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Log in to your account."""
    login_command(email, password)


@app.command()
def logout() -> None:
    """Log out and forget your session."""
    logout_command()


@app.command(name="list")
def list_transactions(
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    on_date: str = typer.Option(None, "--date", "-d", help="Only this date (YYYY-MM-DD)"),
    transaction_type: str = typer.Option(None, "--type", "-t", help="Income or Expense"),
    year: int = typer.Option(None, "--year", "-y", help="Only this year"),
    month: str = typer.Option(None, "--month", "-m", help="Only this month (1-12 or name)"),
    sort_by: str = typer.Option("amount", "--sort", help="Sort by 'amount' or 'date'"),
    order: str = typer.Option("asc", "--order", help="Sort order 'asc' or 'desc'"),
) -> None:
    """List your transactions."""
    list_command(category, on_date, transaction_type, year, month, sort_by, order)


@app.command()
def add(
    amount: str,
    category: str,
    transaction_type: str = typer.Option("Expense", "--type", "-t", help="Income or Expense"),
    on_date: str = typer.Option(None, "--date", "-d", help="Transaction date (YYYY-MM-DD, default: today)"),
    description: str = typer.Option(None, "--description", help="Optional description"),
) -> None:
    """Add a transaction."""
    add_command(amount, category, transaction_type, on_date, description)


@app.command()
def update(
    transaction_id: str,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    transaction_type: str = typer.Option(None, "--type", "-t", help="Income or Expense"),
    on_date: str = typer.Option(None, "--date", "-d", help="New date (YYYY-MM-DD)"),
    description: str = typer.Option(None, "--description", help="New description ('' to clear)"),
) -> None:
    """Update a transaction."""
    update_command(transaction_id, amount, category, transaction_type, on_date, description)


@app.command()
def delete(
    transaction_id: str,
    yes: bool = typer.Option(False, "--yes", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(transaction_id, yes)


@app.command()
def summary(
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    on_date: str = typer.Option(None, "--date", "-d", help="Only this date (YYYY-MM-DD)"),
    transaction_type: str = typer.Option(None, "--type", "-t", help="Income or Expense"),
    year: int = typer.Option(None, "--year", "-y", help="Only this year"),
    month: str = typer.Option(None, "--month", "-m", help="Only this month (1-12 or name)"),
) -> None:
    """Show your totals and category breakdown."""
    summary_command(category, on_date, transaction_type, year, month)


@app.command()
def chart(
    kind: str = typer.Argument("overview", help="overview, categories, yearly or monthly"),
    transaction_type: str = typer.Option(None, "--type", "-t", help="Income or Expense"),
    year: int = typer.Option(None, "--year", "-y", help="Year for the monthly chart (default: this year)"),
) -> None:
    """Chart your income and expenses."""
    chart_command(kind, transaction_type, year)


@app.command()
def export(
    kind: str = typer.Argument(..., help="pdf, xlsx or mail"),
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: report_dir from config)"),
) -> None:
    """Export a report of all your transactions."""
    export_command(kind, output)


if __name__ == "__main__":
    app()
