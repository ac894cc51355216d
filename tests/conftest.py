"""
Pytest configuration and fixtures for brokerage ledger tests.

This module provides:
- In-memory SQLite database fixtures
- A deterministic clock and price oracle
- Service fixtures wired through a shared unit of work factory
- A FastAPI test client built over an AppContext
"""

import functools
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from brokerage.app_context import AppContext
from brokerage.config.settings import Settings, reset_settings
from brokerage.core.timezone import EASTERN_TZ
from brokerage.domain.models import Position, Wallet
from brokerage.main import create_app
from brokerage.providers import StaticPriceOracle
from brokerage.repositories.sqlalchemy import Database, SqlAlchemyUnitOfWork
from brokerage.services import LedgerService, QueryService, PortfolioEngine


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Clock that advances a fixed step on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(minutes=1)):
        self._now = start
        self._step = step

    def __call__(self) -> datetime:
        current = self._now
        self._now = current + self._step
        return current

    def jump_to(self, moment: datetime) -> None:
        self._now = moment


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 10, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    """Clock starting at fixed_now, one minute per reading."""
    return FakeClock(fixed_now)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def database():
    """Open a shared in-memory SQLite database."""
    reset_settings()
    db = Database("sqlite://")
    db.open()
    yield db
    db.close()


@pytest.fixture
def uow_factory(database) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Factory for units of work bound to the test database."""
    return functools.partial(
        SqlAlchemyUnitOfWork, database.session_factory, lock=database.unit_of_work_lock
    )


# =============================================================================
# PRICE ORACLE FIXTURES
# =============================================================================


TEST_PRICES = {
    "AAPL": Decimal("185.50"),
    "MSFT": Decimal("378.25"),
    "TSLA": Decimal("248.75"),
}


@pytest.fixture
def price_oracle() -> StaticPriceOracle:
    """Deterministic oracle over a small fixed price table."""
    return StaticPriceOracle(TEST_PRICES)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_engine() -> PortfolioEngine:
    """Provide PortfolioEngine seeded with the default balance."""
    return PortfolioEngine(seed_balance=Decimal("10000"))


@pytest.fixture
def ledger_service(uow_factory, portfolio_engine, clock) -> LedgerService:
    """Provide test LedgerService (no retry backoff)."""
    return LedgerService(
        unit_of_work_factory=uow_factory,
        portfolio_engine=portfolio_engine,
        write_retry_backoff_seconds=0,
        clock=clock,
    )


@pytest.fixture
def query_service(uow_factory, price_oracle, portfolio_engine, clock) -> QueryService:
    """Provide test QueryService."""
    return QueryService(
        unit_of_work_factory=uow_factory,
        price_oracle=price_oracle,
        portfolio_engine=portfolio_engine,
        read_retry_backoff_seconds=0,
        clock=clock,
    )


# =============================================================================
# STATE HELPERS
# =============================================================================


@pytest.fixture
def load_state(uow_factory) -> Callable[[], tuple[Optional[Wallet], list[Position], int]]:
    """Read wallet, positions and transaction count straight from storage."""

    def _load():
        with uow_factory() as uow:
            return (
                uow.wallets.get(),
                uow.positions.list_all(),
                len(uow.transactions.list_all()),
            )

    return _load


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_settings() -> Settings:
    """Settings for the API client: in-memory database, static prices."""
    return Settings(
        database_url="sqlite://",
        static_prices={symbol: str(price) for symbol, price in TEST_PRICES.items()},
        write_retry_backoff_seconds=0,
    )


@pytest.fixture
def client(api_settings) -> TestClient:
    """Provide FastAPI test client over a fresh AppContext."""
    app = create_app(AppContext(api_settings))
    with TestClient(app) as c:
        yield c


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.000001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
