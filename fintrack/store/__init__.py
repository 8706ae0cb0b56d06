"""Transaction store layer - holds the current user's transactions in memory.

This module re-exports the store for easy importing.
"""

from fintrack.store.transactions import Repository, TransactionStore

__all__ = [
    "Repository",
    "TransactionStore",
]
