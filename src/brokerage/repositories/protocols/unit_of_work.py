"""Unit of work protocol."""

from types import TracebackType
from typing import Protocol, Optional

from brokerage.repositories.protocols.wallet_repo import WalletRepository
from brokerage.repositories.protocols.position_repo import PositionRepository
from brokerage.repositories.protocols.transaction_repo import TransactionRepository


class UnitOfWork(Protocol):
    """
    A set of repositories sharing one storage transaction.

    Nothing written through the repositories is visible to other units until
    commit() returns. Leaving the context without committing rolls back.
    """

    wallets: WalletRepository
    positions: PositionRepository
    transactions: TransactionRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        ...

    def commit(self) -> None:
        """Make every write in this unit visible atomically."""
        ...

    def rollback(self) -> None:
        """Discard every write in this unit."""
        ...
