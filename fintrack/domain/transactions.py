"""Pure functions for filtering, sorting and validating transactions.

This module contains the functional core for transaction operations:
- No I/O operations (no network, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in minor units (Money type).
"""

import dataclasses
from collections.abc import Iterable
from datetime import date
from typing import Any

from fintrack.dates import parse_month
from fintrack.domain.models import (
    Category,
    FilterCriteria,
    Money,
    SortField,
    SortOrder,
    SortSpec,
    Transaction,
    TransactionInput,
    TransactionType,
    parse_calendar_date,
    to_money,
    to_units,
)
from fintrack.errors import ValidationError


def matches_criteria(transaction: Transaction, criteria: FilterCriteria) -> bool:
    """Check a transaction against every specified filter value.

    Args:
        transaction: Transaction to test.
        criteria: Filter values; unset fields always match.

    Returns:
        True if all specified predicates match.
    """
    if criteria.category is not None and transaction.category != criteria.category:
        return False
    if criteria.transaction_type is not None and transaction.transaction_type != criteria.transaction_type:
        return False
    if criteria.on_date is not None and transaction.created_at != criteria.on_date:
        return False
    if criteria.year is not None and transaction.created_at.year != criteria.year:
        return False
    if criteria.month is not None and transaction.created_at.month != criteria.month:
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: FilterCriteria,
) -> tuple[Transaction, ...]:
    """Return the transactions matching all specified criteria, in input order.

    Args:
        transactions: Transactions to filter.
        criteria: Filter values.

    Returns:
        Tuple of matching transactions (possibly empty).
    """
    return tuple(txn for txn in transactions if matches_criteria(txn, criteria))


def sort_transactions(
    transactions: Iterable[Transaction],
    spec: SortSpec,
) -> tuple[Transaction, ...]:
    """Order transactions by amount or date.

    Uses a stable sort in both directions, so transactions with equal keys
    keep their input order.

    Args:
        transactions: Transactions to sort (not modified).
        spec: Field and direction.

    Returns:
        New tuple in the requested order.
    """
    if spec.field == SortField.DATE:

        def key(txn: Transaction) -> Any:
            return txn.created_at.toordinal()

    else:

        def key(txn: Transaction) -> Any:
            return txn.amount

    return tuple(sorted(transactions, key=key, reverse=spec.order == SortOrder.DESC))


def sign_marker(amount: Money) -> tuple[str, str]:
    """Get the sign character and colour for a signed amount.

    Non-negative amounts are "+" and green, negative amounts "-" and red.
    Every output (console, PDF, spreadsheet) uses this convention.

    Returns:
        Tuple of (sign, colour name).
    """
    if amount < 0:
        return "-", "red"
    return "+", "green"


def signed_amount(transaction: Transaction) -> Money:
    """Amount with expenses negated."""
    if transaction.transaction_type == TransactionType.EXPENSE:
        return Money(-transaction.amount)
    return transaction.amount


def format_money(amount: Money, currency: str = "Rs.", include_sign: bool = False) -> str:
    """Format money amount for display, rounding to two fractional digits.

    Args:
        amount: Amount in minor units.
        currency: Currency prefix.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "-Rs. 1,234.50" or "Rs. 1,234.50").
    """
    units = to_units(Money(abs(amount)))
    formatted = f"{currency} {units:,.2f}" if currency else f"{units:,.2f}"

    if include_sign:
        sign, _ = sign_marker(amount)
        return f"{sign}{formatted}"
    return formatted


def parse_category(value: str) -> Category:
    """Resolve a category name case-insensitively.

    Raises:
        ValueError: If the name is not a known category.
    """
    for category in Category:
        if category.value.lower() == value.strip().lower():
            return category
    choices = ", ".join(c.value for c in Category)
    raise ValueError(f"Unknown category '{value}' (choose from {choices})")


def parse_transaction_type(value: str) -> TransactionType:
    """Resolve a transaction type case-insensitively.

    Raises:
        ValueError: If the value is neither Income nor Expense.
    """
    for txn_type in TransactionType:
        if txn_type.value.lower() == value.strip().lower():
            return txn_type
    raise ValueError(f"Unknown transaction type '{value}' (choose Income or Expense)")


def build_transaction_input(
    amount: Any,
    category: str | None,
    created_at: Any,
    transaction_type: str | None,
    description: str | None = None,
) -> TransactionInput:
    """Validate raw form values into a TransactionInput.

    All problems are collected before raising, so the user sees every
    invalid field at once.

    Args:
        amount: Amount in currency units.
        category: Category name.
        created_at: Date string or date.
        transaction_type: "Income" or "Expense".
        description: Optional free text; blank becomes None.

    Returns:
        Validated TransactionInput.

    Raises:
        ValidationError: If any required field is missing or invalid.
    """
    errors: dict[str, str] = {}

    money: Money | None = None
    if amount is None or str(amount).strip() == "":
        errors["amount"] = "required"
    else:
        try:
            money = to_money(amount)
        except ValueError:
            errors["amount"] = f"'{amount}' is not a number"
        else:
            if money < 0:
                errors["amount"] = "must not be negative"

    parsed_category: Category | None = None
    if not category or not category.strip():
        errors["category"] = "required"
    else:
        try:
            parsed_category = parse_category(category)
        except ValueError as e:
            errors["category"] = str(e)

    parsed_date: date | None = None
    if created_at is None or str(created_at).strip() == "":
        errors["date"] = "required"
    else:
        try:
            parsed_date = parse_calendar_date(created_at)
        except ValueError as e:
            errors["date"] = str(e)

    parsed_type: TransactionType | None = None
    if not transaction_type or not transaction_type.strip():
        errors["type"] = "required"
    else:
        try:
            parsed_type = parse_transaction_type(transaction_type)
        except ValueError as e:
            errors["type"] = str(e)

    if errors:
        raise ValidationError(errors)

    assert money is not None and parsed_category is not None
    assert parsed_date is not None and parsed_type is not None

    cleaned = description.strip() if description else ""
    return TransactionInput(
        transaction_type=parsed_type,
        amount=money,
        category=parsed_category,
        created_at=parsed_date,
        description=cleaned or None,
    )


def input_from_transaction(transaction: Transaction) -> TransactionInput:
    """Full-record input for an existing transaction (used as update base)."""
    return TransactionInput(
        transaction_type=transaction.transaction_type,
        amount=transaction.amount,
        category=transaction.category,
        created_at=transaction.created_at,
        description=transaction.description,
    )


def merge_update(transaction: Transaction, update: TransactionInput) -> Transaction:
    """Apply a confirmed full-record update locally, keeping the id."""
    return dataclasses.replace(
        transaction,
        transaction_type=update.transaction_type,
        amount=update.amount,
        category=update.category,
        created_at=update.created_at,
        description=update.description,
    )


def build_filter_criteria(
    category: str | None = None,
    on_date: str | None = None,
    transaction_type: str | None = None,
    year: int | None = None,
    month: str | None = None,
) -> FilterCriteria:
    """Turn raw filter values into FilterCriteria; blank values match all.

    Raises:
        ValidationError: If any value is invalid.
    """
    errors: dict[str, str] = {}
    criteria: dict[str, Any] = {"year": year}

    parsers = (
        ("category", category, parse_category),
        ("on_date", on_date, parse_calendar_date),
        ("transaction_type", transaction_type, parse_transaction_type),
        ("month", month, parse_month),
    )
    for field, raw, parser in parsers:
        if raw is None or raw == "":
            continue
        try:
            criteria[field] = parser(raw)
        except ValueError as e:
            errors[field] = str(e)

    if errors:
        raise ValidationError(errors)
    return FilterCriteria(**criteria)
