"""Domain models and types for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

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
)

__all__ = [
    "Category",
    "FilterCriteria",
    "Money",
    "SortField",
    "SortOrder",
    "SortSpec",
    "Transaction",
    "TransactionInput",
    "TransactionType",
]
