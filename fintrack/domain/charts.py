"""Reshape aggregation output into labelled series for charts.

A series is a label plus ordered (label, value) points. The renderer (the
console bar chart in commands/report.py) only ever sees series, never
transactions. Empty input gives empty or zero-valued series.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from fintrack.dates import MONTH_NAMES
from fintrack.domain.models import Money, Transaction, TransactionType
from fintrack.domain.report import AggregationResult, Totals


@dataclass(frozen=True)
class Series:
    """Immutable labelled numeric series."""

    label: str
    points: tuple[tuple[str, Money], ...]

    @property
    def total(self) -> Money:
        return Money(sum(value for _, value in self.points))


def income_vs_expense_series(totals: Totals) -> Series:
    """Two-slice series of total income against total expense."""
    points: tuple[tuple[str, Money], ...] = ()
    if totals.total_income or totals.total_expense:
        points = (
            (TransactionType.INCOME.value, totals.total_income),
            (TransactionType.EXPENSE.value, totals.total_expense),
        )
    return Series(label="Income vs Expense", points=points)


def category_series(result: AggregationResult, transaction_type: TransactionType) -> Series:
    """Per-category series for income or expense, zero categories omitted."""
    if transaction_type == TransactionType.INCOME:
        breakdown = result.income_by_category
    else:
        breakdown = result.expense_by_category
    return Series(
        label=f"Category-wise {transaction_type.value}",
        points=tuple((cat.value, amount) for cat, amount in breakdown.items() if amount),
    )


def yearly_series(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType | None = None,
) -> Series:
    """One point per calendar year present, ascending.

    Args:
        transactions: Transactions to sum.
        transaction_type: Only count this type; None counts all amounts.

    Returns:
        Series labelled by year.
    """
    by_year: dict[int, int] = {}
    for txn in transactions:
        if transaction_type is not None and txn.transaction_type != transaction_type:
            continue
        year = txn.created_at.year
        by_year[year] = by_year.get(year, 0) + txn.amount

    kind = transaction_type.value if transaction_type else "Transactions"
    return Series(
        label=f"Yearly {kind}",
        points=tuple((str(year), Money(by_year[year])) for year in sorted(by_year)),
    )


def monthly_series(
    transactions: Iterable[Transaction],
    year: int,
    transaction_type: TransactionType,
) -> Series:
    """Twelve points, January to December, for one year and type.

    Months without matching transactions are zero.
    """
    months = [0] * 12
    for txn in transactions:
        if txn.created_at.year != year or txn.transaction_type != transaction_type:
            continue
        months[txn.created_at.month - 1] += txn.amount

    return Series(
        label=f"Monthly {transaction_type.value} {year}",
        points=tuple((name, Money(value)) for name, value in zip(MONTH_NAMES, months)),
    )


def calculate_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate chart bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
