"""View models for service outputs."""

from brokerage.domain.views.ledger import (
    BuyResult,
    SellResult,
    CashResult,
    DepositResult,
    WithdrawalResult,
    RebuildSummary,
)
from brokerage.domain.views.portfolio import (
    PositionView,
    PerformanceView,
    PortfolioSummaryView,
    TransactionPage,
)

__all__ = [
    "BuyResult",
    "SellResult",
    "CashResult",
    "DepositResult",
    "WithdrawalResult",
    "RebuildSummary",
    "PositionView",
    "PerformanceView",
    "PortfolioSummaryView",
    "TransactionPage",
]
