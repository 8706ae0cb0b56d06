"""Pure functions for totals, groupings and report data.

This module contains the functional core for reporting operations:
- No I/O operations (no network, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in minor units (Money type). Nothing here rounds;
rounding to two fractional digits happens only when an amount is formatted.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from fintrack.dates import format_display_date, format_timestamp, month_year_label
from fintrack.domain.models import Category, Money, SortField, SortOrder, SortSpec, Transaction, TransactionType
from fintrack.domain.transactions import signed_amount, sort_transactions

REPORT_TITLE = "Transaction Report"
DESCRIPTION_PLACEHOLDER = "-"

# Bucket order for each renderer: first occurrence after this sort
PDF_ORDERING = SortSpec(field=SortField.AMOUNT, order=SortOrder.DESC)
XLSX_ORDERING = SortSpec(field=SortField.DATE, order=SortOrder.DESC)


@dataclass(frozen=True)
class Totals:
    """Immutable income, expense and signed balance."""

    total_income: Money
    total_expense: Money
    total_balance: Money


@dataclass(frozen=True)
class MonthBucket:
    """Transactions sharing a month-year label, with their own totals."""

    label: str
    transactions: tuple[Transaction, ...]
    totals: Totals


@dataclass(frozen=True)
class AggregationResult:
    """Immutable totals and groupings for a transaction subset."""

    totals: Totals
    income_by_category: dict[Category, Money]
    expense_by_category: dict[Category, Money]
    buckets: tuple[MonthBucket, ...]


@dataclass(frozen=True)
class ReportRow:
    """One transaction as it appears in a report."""

    transaction_type: TransactionType
    amount: Money  # signed: expenses negative
    category: str
    date: str
    description: str


@dataclass(frozen=True)
class ReportSection:
    """Month-year bucket as it appears in a report."""

    label: str
    totals: Totals
    rows: tuple[ReportRow, ...]


@dataclass(frozen=True)
class ReportData:
    """Everything a report renderer needs, already ordered."""

    title: str
    generated_at: str
    totals: Totals
    sections: tuple[ReportSection, ...]


def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum income and expense and compute the signed balance.

    Args:
        transactions: Transactions to total (empty is allowed).

    Returns:
        Totals; all zero for empty input.
    """
    income = 0
    expense = 0
    for txn in transactions:
        if txn.transaction_type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return Totals(
        total_income=Money(income),
        total_expense=Money(expense),
        total_balance=Money(income - expense),
    )


def category_breakdown(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> dict[Category, Money]:
    """Sum amounts per category for one transaction type.

    Categories without any transaction of that type are omitted, and a
    category whose transactions all have zero amount is omitted too.

    Args:
        transactions: Transactions to group.
        transaction_type: Income or Expense.

    Returns:
        Mapping of category to total, in order of first occurrence.
    """
    sums: dict[Category, int] = {}
    for txn in transactions:
        if txn.transaction_type != transaction_type:
            continue
        sums[txn.category] = sums.get(txn.category, 0) + txn.amount
    return {cat: Money(total) for cat, total in sums.items() if total != 0}


def category_percentages(breakdown: dict[Category, Money]) -> dict[Category, float]:
    """Calculate each category's share of the breakdown total.

    Args:
        breakdown: Category totals from category_breakdown.

    Returns:
        Mapping of category to percentage (0-100); empty if the total is zero.
    """
    total = sum(breakdown.values())
    if total <= 0:
        return {}
    return {cat: amount / total * 100 for cat, amount in breakdown.items()}


def group_by_month_year(transactions: Iterable[Transaction]) -> tuple[MonthBucket, ...]:
    """Bucket transactions by "Month Year" label.

    Buckets appear in order of their first transaction in the input, and
    transactions keep their input order inside a bucket.

    Args:
        transactions: Transactions to group.

    Returns:
        Tuple of MonthBucket, each with its own totals.
    """
    grouped: dict[str, list[Transaction]] = {}
    for txn in transactions:
        grouped.setdefault(month_year_label(txn.created_at), []).append(txn)

    return tuple(
        MonthBucket(label=label, transactions=tuple(txns), totals=compute_totals(txns))
        for label, txns in grouped.items()
    )


def aggregate(transactions: Iterable[Transaction]) -> AggregationResult:
    """Compute totals, category breakdowns and month buckets in one pass.

    Args:
        transactions: Transactions to aggregate.

    Returns:
        AggregationResult for the subset.
    """
    snapshot = tuple(transactions)
    return AggregationResult(
        totals=compute_totals(snapshot),
        income_by_category=category_breakdown(snapshot, TransactionType.INCOME),
        expense_by_category=category_breakdown(snapshot, TransactionType.EXPENSE),
        buckets=group_by_month_year(snapshot),
    )


def create_report_row(transaction: Transaction) -> ReportRow:
    """Create the display row for one transaction."""
    return ReportRow(
        transaction_type=transaction.transaction_type,
        amount=signed_amount(transaction),
        category=transaction.category.value,
        date=format_display_date(transaction.created_at),
        description=transaction.description or DESCRIPTION_PLACEHOLDER,
    )


def build_report_data(
    transactions: Iterable[Transaction],
    ordering: SortSpec,
    generated_at: datetime,
    title: str = REPORT_TITLE,
) -> ReportData:
    """Build renderer input from a transaction set.

    Transactions are sorted with ``ordering`` first; buckets then follow the
    first occurrence of each month in that order.

    Args:
        transactions: Transactions to report on.
        ordering: Sort applied before bucketing.
        generated_at: Timestamp printed on the report.
        title: Report title.

    Returns:
        ReportData with flat totals and ordered sections.
    """
    ordered = sort_transactions(transactions, ordering)
    sections = tuple(
        ReportSection(
            label=bucket.label,
            totals=bucket.totals,
            rows=tuple(create_report_row(txn) for txn in bucket.transactions),
        )
        for bucket in group_by_month_year(ordered)
    )
    return ReportData(
        title=title,
        generated_at=format_timestamp(generated_at),
        totals=compute_totals(ordered),
        sections=sections,
    )
