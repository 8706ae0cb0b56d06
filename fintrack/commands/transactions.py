"""Transaction management commands (list, add, update, delete)."""

from datetime import date

import typer
from rich.markup import escape
from rich.table import Table

from fintrack.commands.context import console, fail, load_context
from fintrack.commands.report import render_totals
from fintrack.dates import format_display_date
from fintrack.domain.models import (
    SortField,
    SortOrder,
    SortSpec,
    Transaction,
    to_units,
)
from fintrack.domain.report import compute_totals
from fintrack.domain.transactions import (
    build_filter_criteria,
    build_transaction_input,
    filter_transactions,
    format_money,
    sign_marker,
    signed_amount,
    sort_transactions,
)
from fintrack.errors import FintrackError, ValidationError
from fintrack.store import TransactionStore


def render_transaction_table(transactions: tuple[Transaction, ...], currency: str, title: str) -> None:
    """Print transactions as a table with signed, coloured amounts."""
    table = Table(title=title)

    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="dim")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="cyan")
    table.add_column("Date")
    table.add_column("Description", style="white")

    for idx, txn in enumerate(transactions, 1):
        amount = signed_amount(txn)
        _, colour = sign_marker(amount)
        amount_display = f"[{colour}]{escape(format_money(amount, currency, include_sign=True))}[/{colour}]"
        table.add_row(
            str(idx),
            escape(txn.id),
            amount_display,
            txn.category.value,
            format_display_date(txn.created_at),
            escape(txn.description) if txn.description else "[dim]-[/dim]",
        )

    console.print(table)


def list_command(
    category: str | None = None,
    on_date: str | None = None,
    transaction_type: str | None = None,
    year: int | None = None,
    month: str | None = None,
    sort_by: str = "amount",
    order: str = "asc",
) -> None:
    """List transactions matching the filters, sorted, with totals."""
    try:
        criteria = build_filter_criteria(category, on_date, transaction_type, year, month)
        spec = SortSpec(field=SortField(sort_by), order=SortOrder(order))
    except ValidationError as e:
        fail(e)
    except ValueError as e:
        fail(f"Invalid sort option: {e}")

    ctx = load_context()

    store = TransactionStore()
    try:
        store.refresh(ctx.repository)
    except FintrackError as e:
        fail(e)

    matching = filter_transactions(store.snapshot(), criteria)
    if not matching:
        if store.snapshot():
            console.print("[yellow]No transactions found for the selected filters.[/yellow]")
        else:
            console.print("[dim]No transactions yet (use 'fintrack add' to record one)[/dim]")
        return

    ordered = sort_transactions(matching, spec)
    render_transaction_table(ordered, ctx.currency, f"Transactions ({len(ordered)})")
    console.print()
    render_totals(compute_totals(ordered), ctx.currency)


def add_command(
    amount: str,
    category: str,
    transaction_type: str = "Expense",
    on_date: str | None = None,
    description: str | None = None,
) -> None:
    """Record a new transaction.

    Args:
        amount: Amount in currency units (non-negative).
        category: Category name.
        transaction_type: "Income" or "Expense".
        on_date: Transaction date; defaults to today.
        description: Optional description.
    """
    try:
        new_txn = build_transaction_input(
            amount=amount,
            category=category,
            created_at=on_date or date.today(),
            transaction_type=transaction_type,
            description=description,
        )
    except ValidationError as e:
        fail(e)

    ctx = load_context()
    store = TransactionStore()
    try:
        created = store.add(ctx.repository, new_txn)
    except FintrackError as e:
        fail(e)

    sign, colour = sign_marker(signed_amount(created))
    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {escape(created.id)}")
    console.print(f"  Type: {created.transaction_type.value}")
    console.print(f"  Amount: [{colour}]{sign}{escape(format_money(created.amount, ctx.currency))}[/{colour}]")
    console.print(f"  Category: {created.category.value}")
    console.print(f"  Date: {format_display_date(created.created_at)}")
    if created.description:
        console.print(f"  Description: {escape(created.description)}")


def update_command(
    transaction_id: str,
    amount: str | None = None,
    category: str | None = None,
    transaction_type: str | None = None,
    on_date: str | None = None,
    description: str | None = None,
) -> None:
    """Update a transaction; options left out keep their current value.

    The full record is sent to the server, never a partial patch. An empty
    description ("") clears it.
    """
    ctx = load_context()
    store = TransactionStore()
    try:
        store.refresh(ctx.repository)
    except FintrackError as e:
        fail(e)

    current = store.get(transaction_id)
    if current is None:
        fail(f"Transaction {transaction_id} not found")

    try:
        updated_input = build_transaction_input(
            amount=amount if amount is not None else to_units(current.amount),
            category=category if category is not None else current.category.value,
            created_at=on_date if on_date is not None else current.created_at,
            transaction_type=transaction_type if transaction_type is not None else current.transaction_type.value,
            description=description if description is not None else current.description,
        )
    except ValidationError as e:
        fail(e)

    try:
        updated = store.update(ctx.repository, transaction_id, updated_input)
    except FintrackError as e:
        fail(e)

    console.print(f"[green]✓[/green] Updated transaction {escape(transaction_id)}:")
    console.print(f"  Amount: {escape(format_money(signed_amount(updated), ctx.currency, include_sign=True))}")
    console.print(f"  Category: {updated.category.value}")
    console.print(f"  Date: {format_display_date(updated.created_at)}")
    console.print(f"  Description: {escape(updated.description or '-')}")


def delete_command(transaction_id: str, yes: bool = False) -> None:
    """Delete a transaction after confirmation."""
    ctx = load_context()
    store = TransactionStore()
    try:
        store.refresh(ctx.repository)
    except FintrackError as e:
        fail(e)

    txn = store.get(transaction_id)
    if txn is None:
        fail(f"Transaction {transaction_id} not found")

    amount_display = format_money(signed_amount(txn), ctx.currency, include_sign=True)
    summary = f"{format_display_date(txn.created_at)} {txn.category.value} {amount_display}"

    if not yes and not typer.confirm(f"Delete {summary}?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        store.delete(ctx.repository, transaction_id)
    except FintrackError as e:
        fail(e)

    console.print(f"[green]✓[/green] Deleted {escape(summary)}")
