"""Summary and chart commands for viewing aggregated transaction data."""

from datetime import date

from rich.markup import escape
from rich.table import Table

from fintrack.commands.context import console, fail, load_context
from fintrack.domain.charts import (
    Series,
    calculate_bar_length,
    category_series,
    income_vs_expense_series,
    monthly_series,
    yearly_series,
)
from fintrack.domain.models import Category, Money, TransactionType
from fintrack.domain.report import Totals, aggregate, category_percentages
from fintrack.domain.transactions import (
    build_filter_criteria,
    filter_transactions,
    format_money,
    parse_transaction_type,
    sign_marker,
)
from fintrack.errors import FintrackError, ValidationError
from fintrack.store import TransactionStore

CHART_KINDS = ("overview", "categories", "yearly", "monthly")
BAR_WIDTH = 40


def format_balance(balance: Money, currency: str) -> str:
    """Balance with sign, arrow and colour markup."""
    sign, colour = sign_marker(balance)
    arrow = "▲" if sign == "+" else "▼"
    return f"[{colour}]{arrow} {escape(format_money(balance, currency, include_sign=True))}[/{colour}]"


def render_totals(totals: Totals, currency: str) -> None:
    """Print income, expense and balance lines."""
    console.print(f"[bold]Total income:[/bold]  [green]{escape(format_money(totals.total_income, currency))}[/green]")
    console.print(f"[bold]Total expense:[/bold] [red]{escape(format_money(totals.total_expense, currency))}[/red]")
    console.print(f"[bold]Balance:[/bold]       {format_balance(totals.total_balance, currency)}")


def render_breakdown(title: str, breakdown: dict[Category, Money], currency: str, colour: str) -> None:
    """Print a category breakdown table with percentage of total."""
    percentages = category_percentages(breakdown)
    table = Table(title=title, title_style=f"bold {colour}")
    table.add_column("Category", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")

    for category, amount in sorted(breakdown.items(), key=lambda x: x[1], reverse=True):
        table.add_row(category.value, escape(format_money(amount, currency)), f"{percentages.get(category, 0):.1f}%")

    console.print(table)


def render_series(series: Series, currency: str) -> None:
    """Print a series as horizontal bars."""
    console.print(f"[bold cyan]{series.label}[/bold cyan]\n")
    if not series.points:
        console.print("  [dim]No data[/dim]\n")
        return

    max_amount = Money(max(value for _, value in series.points))
    total = series.total
    for label, value in series.points:
        bar = "█" * calculate_bar_length(value, max_amount, BAR_WIDTH)
        share = f"{value / total * 100:5.1f}%" if total else "  0.0%"
        console.print(f"  {label:14} {escape(format_money(value, currency)):>16} {share} {bar}")
    console.print()


def load_all_transactions() -> tuple[TransactionStore, str]:
    ctx = load_context()
    store = TransactionStore()
    try:
        store.refresh(ctx.repository)
    except FintrackError as e:
        fail(e)
    return store, ctx.currency


def summary_command(
    category: str | None = None,
    on_date: str | None = None,
    transaction_type: str | None = None,
    year: int | None = None,
    month: str | None = None,
) -> None:
    """Show totals and per-category breakdowns for the filtered transactions."""
    try:
        criteria = build_filter_criteria(category, on_date, transaction_type, year, month)
    except ValidationError as e:
        fail(e)

    store, currency = load_all_transactions()
    subset = filter_transactions(store.snapshot(), criteria)
    if not subset:
        console.print("[yellow]No transactions found for the selected filters.[/yellow]")
        return

    result = aggregate(subset)
    render_totals(result.totals, currency)
    console.print()

    if result.income_by_category:
        render_breakdown("Income by category", result.income_by_category, currency, "green")
    if result.expense_by_category:
        render_breakdown("Expenses by category", result.expense_by_category, currency, "red")


def chart_command(
    kind: str,
    transaction_type: str | None = None,
    year: int | None = None,
) -> None:
    """Draw one of the chart series in the terminal.

    Args:
        kind: overview, categories, yearly or monthly.
        transaction_type: Income or Expense (monthly defaults to Expense).
        year: Year for the monthly chart (defaults to the current year).
    """
    if kind not in CHART_KINDS:
        fail(f"Unknown chart '{kind}' (choose from {', '.join(CHART_KINDS)})")

    txn_type: TransactionType | None = None
    if transaction_type:
        try:
            txn_type = parse_transaction_type(transaction_type)
        except ValueError as e:
            fail(ValidationError({"type": str(e)}))

    store, currency = load_all_transactions()
    transactions = store.snapshot()

    if kind == "overview":
        render_series(income_vs_expense_series(aggregate(transactions).totals), currency)
    elif kind == "categories":
        result = aggregate(transactions)
        types = [txn_type] if txn_type else [TransactionType.EXPENSE, TransactionType.INCOME]
        for each in types:
            render_series(category_series(result, each), currency)
    elif kind == "yearly":
        render_series(yearly_series(transactions, txn_type), currency)
    else:
        render_series(
            monthly_series(transactions, year or date.today().year, txn_type or TransactionType.EXPENSE),
            currency,
        )
