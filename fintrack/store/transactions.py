"""In-memory snapshot of the current user's transactions.

The snapshot is an immutable tuple replaced wholesale after every confirmed
repository round-trip. A failed repository call leaves it untouched.
"""

from typing import Protocol

from fintrack.domain.models import Transaction, TransactionInput
from fintrack.domain.transactions import merge_update
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)


class Repository(Protocol):
    """What the store needs from the transaction API."""

    def list(self) -> list[Transaction]: ...

    def create(self, transaction: TransactionInput) -> Transaction: ...

    def update(self, transaction_id: str, transaction: TransactionInput) -> None: ...

    def delete(self, transaction_id: str) -> None: ...


class TransactionStore:
    """Holds the latest transaction snapshot.

    Fetches are tagged with a sequence number; a result arriving for an
    older fetch than the newest one issued is discarded.
    """

    def __init__(self) -> None:
        self._transactions: tuple[Transaction, ...] = ()
        self._loaded = False
        self._issued = 0

    @property
    def loaded(self) -> bool:
        """True once any fetch has completed, even if it returned nothing."""
        return self._loaded

    def snapshot(self) -> tuple[Transaction, ...]:
        return self._transactions

    def get(self, transaction_id: str) -> Transaction | None:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def begin_fetch(self) -> int:
        """Issue a ticket for a new fetch."""
        self._issued += 1
        return self._issued

    def complete_fetch(self, ticket: int, transactions: list[Transaction]) -> bool:
        """Apply a fetch result if it belongs to the newest fetch.

        Args:
            ticket: Value returned by begin_fetch for this fetch.
            transactions: Fetched transactions.

        Returns:
            True if the snapshot was replaced, False if the result was stale.
        """
        if ticket != self._issued:
            logger.debug("Discarding stale fetch %d (newest is %d)", ticket, self._issued)
            return False
        self._transactions = tuple(transactions)
        self._loaded = True
        return True

    def refresh(self, repository: Repository) -> tuple[Transaction, ...]:
        """Fetch the full transaction list and replace the snapshot.

        Raises:
            ApiError: If the repository call fails (snapshot unchanged).
        """
        ticket = self.begin_fetch()
        transactions = repository.list()
        self.complete_fetch(ticket, transactions)
        return self._transactions

    def add(self, repository: Repository, transaction: TransactionInput) -> Transaction:
        """Create a transaction and append the server's copy."""
        created = repository.create(transaction)
        self._transactions = self._transactions + (created,)
        logger.info("Created transaction %s", created.id)
        return created

    def update(self, repository: Repository, transaction_id: str, transaction: TransactionInput) -> Transaction:
        """Update a transaction and merge the fields locally once confirmed.

        The merged copy stands until the next refresh returns the server's
        authoritative record.

        Raises:
            KeyError: If the id is not in the snapshot.
            ApiError: If the repository call fails (snapshot unchanged).
        """
        current = self.get(transaction_id)
        if current is None:
            raise KeyError(transaction_id)

        repository.update(transaction_id, transaction)

        merged = merge_update(current, transaction)
        self._transactions = tuple(merged if t.id == transaction_id else t for t in self._transactions)
        logger.info("Updated transaction %s", transaction_id)
        return merged

    def delete(self, repository: Repository, transaction_id: str) -> None:
        """Delete a transaction and drop it from the snapshot once confirmed.

        Raises:
            ApiError: If the repository call fails (snapshot unchanged).
        """
        repository.delete(transaction_id)
        self._transactions = tuple(t for t in self._transactions if t.id != transaction_id)
        logger.info("Deleted transaction %s", transaction_id)
