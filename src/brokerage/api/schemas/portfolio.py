"""Pydantic schemas for portfolio summary API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PositionOut(BaseModel):
    """A single holding valued at the current oracle price."""

    symbol: str
    shares: float
    avg_cost: float
    current_price: float
    market_value: float
    unrealized_pnl: float
    unrealized_pnl_percent: float


class PerformanceOut(BaseModel):
    """Performance figures derived from the transaction log."""

    inception_date: Optional[datetime] = None
    total_deposits: float
    total_withdrawals: float
    net_contributions: float
    realized_pnl: float
    total_return: float
    total_return_percent: float
    total_trades: int
    buy_trades: int
    sell_trades: int


class PortfolioSummaryResponse(BaseModel):
    """Portfolio summary: account value, cash, positions and performance."""

    success: bool = True
    account_value: float
    balance: float
    buying_power: float
    positions: Optional[list[PositionOut]] = None
    performance: Optional[PerformanceOut] = None
    last_updated: Optional[datetime] = None


class RebuildResponse(BaseModel):
    """Result of rebuilding wallet and positions from the log."""

    success: bool = True
    transactions_replayed: int
    balance: float
    positions: int
    realized_pnl: float
