"""Domain type definitions for fintrack.

These types describe the single domain entity (a transaction) and the
ephemeral values the user picks to narrow and order it:
- Money: Amount in minor units (hundredths of the currency unit)
- TransactionType / Category: Fixed enumerations accepted by the API
- Transaction: Immutable record as returned by the repository
- TransactionInput: Record submitted on create/update (no id)
- FilterCriteria / SortSpec: User-chosen filter and ordering
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, NewType

import pandas as pd

# Money amounts are stored as minor units to avoid floating point errors
Money = NewType("Money", int)


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "Income"
    EXPENSE = "Expense"


class Category(str, Enum):
    """Categories accepted by the transaction API."""

    FOOD = "Food"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    HEALTH = "Health"
    EDUCATION = "Education"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    RENT = "Rent"
    SALARY = "Salary"
    OTHER = "Other"


def to_money(value: Any) -> Money:
    """Convert a decimal amount (number or string) to minor units.

    Args:
        value: Amount in currency units, e.g. 12.5 or "12.50".

    Returns:
        Amount in minor units.

    Raises:
        ValueError: If the value is not a number.
    """
    try:
        # str() first so floats like 0.1 keep their shortest decimal form
        units = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount '{value}'") from e
    if not units.is_finite():
        raise ValueError(f"Invalid amount '{value}'")
    return Money(int((units * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)))


def to_units(amount: Money) -> Decimal:
    """Convert minor units back to an exact decimal amount."""
    return Decimal(amount).scaleb(-2)


def parse_calendar_date(value: Any) -> date:
    """Parse an API timestamp or user-entered date to a calendar date.

    Timezone-aware timestamps are converted to UTC before truncation, so
    "2024-01-05T00:00:00.000Z" is always 2024-01-05.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if type(value) is date:
        return value
    try:
        parsed = pd.to_datetime(value, dayfirst=False)
    except (ValueError, TypeError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}") from e
    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{value}'")
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC")
    return parsed.date()


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: str
    transaction_type: TransactionType
    amount: Money
    category: Category
    created_at: date
    description: str | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Transaction {self.id} has negative amount {self.amount}")

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Transaction":
        """Build a transaction from the repository's JSON representation.

        Raises:
            ValueError: If a field is missing or not a valid value.
        """
        try:
            return cls(
                id=str(payload["_id"]),
                transaction_type=TransactionType(payload["transactionType"]),
                amount=to_money(payload["amount"]),
                category=Category(payload["category"]),
                created_at=parse_calendar_date(payload["createdAt"]),
                description=payload.get("description") or None,
            )
        except KeyError as e:
            raise ValueError(f"Transaction payload missing field {e}") from e


@dataclass(frozen=True)
class TransactionInput:
    """Immutable transaction data submitted to the repository."""

    transaction_type: TransactionType
    amount: Money
    category: Category
    created_at: date
    description: str | None = None

    def to_api(self) -> dict[str, Any]:
        """Serialize for the repository; a blank description is omitted."""
        payload: dict[str, Any] = {
            "transactionType": self.transaction_type.value,
            "amount": float(to_units(self.amount)),
            "category": self.category.value,
            "createdAt": self.created_at.isoformat(),
        }
        if self.description and self.description.strip():
            payload["description"] = self.description.strip()
        return payload


@dataclass(frozen=True)
class FilterCriteria:
    """Filter values; None means match all."""

    category: Category | None = None
    on_date: date | None = None
    transaction_type: TransactionType | None = None
    year: int | None = None
    month: int | None = None


class SortField(str, Enum):
    AMOUNT = "amount"
    DATE = "date"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    """Field and direction to order transactions by."""

    field: SortField = SortField.AMOUNT
    order: SortOrder = SortOrder.ASC
