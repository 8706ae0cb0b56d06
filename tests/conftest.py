"""Shared fixtures for fintrack tests."""

import itertools
from collections.abc import Callable
from datetime import date

import pytest

from fintrack.domain.models import Category, Transaction, TransactionType, to_money

TransactionFactory = Callable[..., Transaction]


@pytest.fixture
def make_transaction() -> TransactionFactory:
    """Factory building transactions with sequential ids."""
    counter = itertools.count(1)

    def _make(
        transaction_type: str = "Expense",
        amount: str = "100",
        category: str = "Food",
        created_at: str = "2024-01-05",
        description: str | None = None,
        id: str | None = None,
    ) -> Transaction:
        return Transaction(
            id=id or f"t{next(counter)}",
            transaction_type=TransactionType(transaction_type),
            amount=to_money(amount),
            category=Category(category),
            created_at=date.fromisoformat(created_at),
            description=description,
        )

    return _make


@pytest.fixture
def scenario(make_transaction: TransactionFactory) -> tuple[Transaction, ...]:
    """Two food expenses and a salary across January and February 2024."""
    return (
        make_transaction("Expense", "100", "Food", "2024-01-05", id="jan-food"),
        make_transaction("Income", "500", "Salary", "2024-01-10", id="jan-salary"),
        make_transaction("Expense", "50", "Food", "2024-02-01", id="feb-food"),
    )
