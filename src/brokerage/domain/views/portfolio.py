"""View models for portfolio and history outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from brokerage.domain.models import Transaction


@dataclass
class PositionView:
    """View model for a single holding valued at the oracle price."""

    symbol: str
    shares: Decimal
    avg_cost: Decimal
    current_price: Decimal
    market_value: Decimal
    unrealized_pnl: Decimal
    unrealized_pnl_percent: Decimal


@dataclass
class PerformanceView:
    """Performance figures derived only from the transaction log and wallet."""

    inception_date: Optional[datetime]
    total_deposits: Decimal
    total_withdrawals: Decimal
    net_contributions: Decimal
    realized_pnl: Decimal
    total_return: Decimal
    total_return_percent: Decimal
    total_trades: int
    buy_trades: int
    sell_trades: int


@dataclass
class PortfolioSummaryView:
    """Portfolio overview: cash, valued holdings and performance."""

    account_value: Decimal
    balance: Decimal
    buying_power: Decimal
    positions: Optional[list[PositionView]] = None
    performance: Optional[PerformanceView] = None
    last_updated: Optional[datetime] = None


@dataclass
class TransactionPage:
    """Filtered transaction history, newest first."""

    transactions: list[Transaction] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.transactions)
