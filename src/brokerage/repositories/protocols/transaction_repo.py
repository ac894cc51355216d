"""Transaction repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from brokerage.domain.models import Transaction, TransactionType


class TransactionRepository(Protocol):
    """Interface for the append-only transaction log."""

    def add(self, transaction: Transaction) -> Transaction:
        """Append a new transaction."""
        ...

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def list_all(self) -> list[Transaction]:
        """List every transaction, oldest first."""
        ...

    def query(
        self,
        txn_type: Optional[TransactionType] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """Query transactions with filters, newest first."""
        ...
