"""API routers package."""

from brokerage.api.routers.trading import router as trading_router
from brokerage.api.routers.wallet import router as wallet_router
from brokerage.api.routers.portfolio import router as portfolio_router
from brokerage.api.routers.transactions import router as transactions_router

__all__ = [
    "trading_router",
    "wallet_router",
    "portfolio_router",
    "transactions_router",
]
