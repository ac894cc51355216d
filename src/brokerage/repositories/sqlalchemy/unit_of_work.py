"""SQLAlchemy unit of work: one session, one commit."""

from types import TracebackType
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from brokerage.repositories.sqlalchemy.wallet_repo import SqlAlchemyWalletRepository
from brokerage.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from brokerage.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository


class SqlAlchemyUnitOfWork:
    """
    Repositories bound to a single session.

    Wallet, position and transaction writes become visible together on
    commit(). Leaving the block without committing, or through any
    exception, rolls everything back.

    When a lock is given (see Database.unit_of_work_lock) it is held from
    entry to exit.
    """

    def __init__(self, session_factory: sessionmaker, lock=None):
        self._session_factory = session_factory
        self._lock = lock
        self._session: Optional[Session] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        if self._lock is not None:
            self._lock.acquire()
        try:
            self._session = self._session_factory()
        except BaseException:
            if self._lock is not None:
                self._lock.release()
            raise
        self.wallets = SqlAlchemyWalletRepository(self._session)
        self.positions = SqlAlchemyPositionRepository(self._session)
        self.transactions = SqlAlchemyTransactionRepository(self._session)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is not None:
                self._session.rollback()
        finally:
            self._session.close()
            self._session = None
            if self._lock is not None:
                self._lock.release()

    def commit(self) -> None:
        """Make every write in this unit visible atomically."""
        self._session.commit()

    def rollback(self) -> None:
        """Discard every write in this unit."""
        self._session.rollback()
