"""API request/response schemas."""

from brokerage.api.schemas.transaction import TransactionOut, TransactionListResponse
from brokerage.api.schemas.trading import (
    TradeRequest,
    CashRequest,
    BuyResponse,
    SellResponse,
    CashResponse,
    WalletResponse,
)
from brokerage.api.schemas.portfolio import (
    PositionOut,
    PerformanceOut,
    PortfolioSummaryResponse,
    RebuildResponse,
)

__all__ = [
    "TransactionOut",
    "TransactionListResponse",
    "TradeRequest",
    "CashRequest",
    "BuyResponse",
    "SellResponse",
    "CashResponse",
    "WalletResponse",
    "PositionOut",
    "PerformanceOut",
    "PortfolioSummaryResponse",
    "RebuildResponse",
]
