"""Service layer - business logic orchestration."""

from brokerage.services.ledger_service import LedgerService
from brokerage.services.query_service import QueryService
from brokerage.services.portfolio_engine import PortfolioEngine, ReplayState
from brokerage.services.ledger_engine import LedgerDecision

__all__ = [
    "LedgerService",
    "QueryService",
    "PortfolioEngine",
    "ReplayState",
    "LedgerDecision",
]
