"""Application context for in-process service management.

Owns the storage handle and builds every service on top of it, so the HTTP
layer and in-process callers share one LedgerService (and its writer lock).
"""

import functools
import logging
from typing import Optional

from brokerage.config.settings import Settings, get_settings
from brokerage.providers import PriceOracle, StubPriceOracle, StaticPriceOracle
from brokerage.repositories.sqlalchemy import Database, SqlAlchemyUnitOfWork
from brokerage.services import LedgerService, QueryService, PortfolioEngine

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created on open() and dropped on close().
    """

    def __init__(self, settings: Optional[Settings] = None, price_oracle: Optional[PriceOracle] = None):
        """
        Initialize application context.

        Args:
            settings: Configuration to use. Defaults to the process-wide settings.
            price_oracle: Oracle override. Defaults to one selected from settings.
        """
        self._settings = settings or get_settings()
        self._oracle_override = price_oracle
        self._database: Optional[Database] = None
        self._ledger_service: Optional[LedgerService] = None
        self._query_service: Optional[QueryService] = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_open(self) -> bool:
        """Check if context is open."""
        return self._database is not None and self._database.is_open

    @property
    def database(self) -> Database:
        self._require_open()
        return self._database

    @property
    def ledger_service(self) -> LedgerService:
        """Get the LedgerService instance."""
        self._require_open()
        return self._ledger_service

    @property
    def query_service(self) -> QueryService:
        """Get the QueryService instance."""
        self._require_open()
        return self._query_service

    def open(self) -> None:
        """Open storage and build the services."""
        if self.is_open:
            return

        settings = self._settings
        self._database = Database(
            settings.get_database_url(),
            timeout_seconds=settings.storage_timeout_seconds,
        )
        self._database.open()

        uow_factory = functools.partial(
            SqlAlchemyUnitOfWork,
            self._database.session_factory,
            lock=self._database.unit_of_work_lock,
        )
        engine = PortfolioEngine(seed_balance=settings.seed_balance)

        self._ledger_service = LedgerService(
            unit_of_work_factory=uow_factory,
            portfolio_engine=engine,
            seed_balance=settings.seed_balance,
            write_retry_attempts=settings.write_retry_attempts,
            write_retry_backoff_seconds=settings.write_retry_backoff_seconds,
        )
        self._query_service = QueryService(
            unit_of_work_factory=uow_factory,
            price_oracle=self._build_oracle(),
            portfolio_engine=engine,
            read_retry_attempts=settings.write_retry_attempts,
            read_retry_backoff_seconds=settings.write_retry_backoff_seconds,
            default_limit=settings.transactions_default_limit,
            max_limit=settings.transactions_max_limit,
        )
        logger.info("Application context opened")

    def close(self) -> None:
        """Release storage. Safe to call more than once."""
        if self._database is not None:
            self._database.close()
        self._database = None
        self._ledger_service = None
        self._query_service = None

    def __enter__(self) -> "AppContext":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _build_oracle(self) -> PriceOracle:
        if self._oracle_override is not None:
            return self._oracle_override
        if self._settings.static_prices:
            return StaticPriceOracle(self._settings.static_prices)
        return StubPriceOracle()

    def _require_open(self) -> None:
        if not self.is_open:
            raise RuntimeError("Application context is not open. Call open() first.")
