"""Query service for portfolio and history reads."""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union

from brokerage.core.exceptions import (
    ValidationError,
    NotFoundError,
    InvalidDateRangeError,
)
from brokerage.core.timezone import now_eastern, to_eastern, parse_date_bound
from brokerage.domain.models import Position, Transaction, TransactionType
from brokerage.domain.views import (
    PositionView,
    PerformanceView,
    PortfolioSummaryView,
    TransactionPage,
)
from brokerage.providers.price_oracle import PriceOracle
from brokerage.repositories.protocols import UnitOfWork
from brokerage.services.portfolio_engine import PortfolioEngine
from brokerage.services.storage_retry import run_with_retries

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_PERCENT_PLACES = Decimal("0.01")

DateBound = Union[str, datetime, None]


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator <= _ZERO:
        return _ZERO
    return (numerator / denominator * _HUNDRED).quantize(_PERCENT_PLACES)


class QueryService:
    """
    Read-only views over the ledger.

    Reads never take the writer lock; each read runs in its own unit of work
    and sees a committed state.
    """

    def __init__(
        self,
        unit_of_work_factory: Callable[[], UnitOfWork],
        price_oracle: PriceOracle,
        portfolio_engine: Optional[PortfolioEngine] = None,
        read_retry_attempts: int = 3,
        read_retry_backoff_seconds: float = 0.05,
        default_limit: int = 50,
        max_limit: int = 500,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._uow_factory = unit_of_work_factory
        self._oracle = price_oracle
        self._portfolio = portfolio_engine or PortfolioEngine()
        self._attempts = read_retry_attempts
        self._backoff = read_retry_backoff_seconds
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._clock = clock

    def get_portfolio_summary(
        self,
        include_positions: bool = True,
        include_performance: bool = True,
    ) -> PortfolioSummaryView:
        """
        Value the portfolio at current oracle prices.

        account_value = balance + Σ(shares × current price)

        Performance figures come from the transaction log and the wallet
        only; they never depend on oracle prices.
        """

        def _load(attempt: int) -> tuple:
            with self._uow_factory() as uow:
                wallet = uow.wallets.get_or_create(self._portfolio.seed_balance, self._clock())
                positions = uow.positions.list_all()
                transactions = uow.transactions.list_all() if include_performance else []
                uow.commit()
                return wallet, positions, transactions

        wallet, positions, transactions = run_with_retries(
            "Load portfolio", _load, self._attempts, self._backoff
        )

        position_views = [self._value_position(p) for p in positions]
        holdings_value = sum((v.market_value for v in position_views), _ZERO)

        return PortfolioSummaryView(
            account_value=wallet.balance + holdings_value,
            balance=wallet.balance,
            buying_power=wallet.buying_power,
            positions=position_views if include_positions else None,
            performance=self._performance(wallet.balance, transactions) if include_performance else None,
            last_updated=wallet.updated_at,
        )

    def get_transactions(
        self,
        txn_type: Union[str, TransactionType, None] = None,
        limit: Optional[int] = None,
        start_date: DateBound = None,
        end_date: DateBound = None,
    ) -> TransactionPage:
        """
        List transactions newest first.

        txn_type "ALL" (or None) disables the type filter. Date bounds are
        inclusive; a bare date as end_date covers that whole day.
        """
        type_filter = self._parse_type(txn_type)
        limit = self._parse_limit(limit)
        start = self._parse_bound(start_date, end_of_day=False)
        end = self._parse_bound(end_date, end_of_day=True)
        if start is not None and end is not None and start > end:
            raise InvalidDateRangeError("start_date must not be after end_date")

        def _load(attempt: int) -> list[Transaction]:
            with self._uow_factory() as uow:
                return uow.transactions.query(
                    txn_type=type_filter,
                    start_date=start,
                    end_date=end,
                    limit=limit,
                )

        transactions = run_with_retries("Load transactions", _load, self._attempts, self._backoff)
        return TransactionPage(transactions=transactions)

    def get_transaction(self, txn_id: str) -> Transaction:
        """Look up a single transaction by id."""

        def _load(attempt: int) -> Optional[Transaction]:
            with self._uow_factory() as uow:
                return uow.transactions.get_by_id(txn_id)

        transaction = run_with_retries("Load transaction", _load, self._attempts, self._backoff)
        if transaction is None:
            raise NotFoundError("Transaction", txn_id)
        return transaction

    def _value_position(self, position: Position) -> PositionView:
        price = self._oracle.get_price(position.symbol)
        market_value = position.shares * price
        unrealized = market_value - position.cost_basis
        return PositionView(
            symbol=position.symbol,
            shares=position.shares,
            avg_cost=position.avg_cost,
            current_price=price,
            market_value=market_value,
            unrealized_pnl=unrealized,
            unrealized_pnl_percent=_percent(unrealized, position.cost_basis),
        )

    def _performance(self, balance: Decimal, transactions: list[Transaction]) -> PerformanceView:
        """
        Summarize the log.

        total_return = balance + open cost basis - net contributions, which
        by conservation equals the realized P&L.
        """
        state = self._portfolio.replay(transactions)
        net_contributions = (
            self._portfolio.seed_balance + state.total_deposits - state.total_withdrawals
        )
        total_return = balance + state.open_cost_basis - net_contributions

        return PerformanceView(
            inception_date=state.inception_date,
            total_deposits=state.total_deposits,
            total_withdrawals=state.total_withdrawals,
            net_contributions=net_contributions,
            realized_pnl=state.realized_pnl,
            total_return=total_return,
            total_return_percent=_percent(total_return, net_contributions),
            total_trades=state.buy_trades + state.sell_trades,
            buy_trades=state.buy_trades,
            sell_trades=state.sell_trades,
        )

    @staticmethod
    def _parse_type(txn_type: Union[str, TransactionType, None]) -> Optional[TransactionType]:
        if txn_type is None or isinstance(txn_type, TransactionType):
            return txn_type
        value = txn_type.strip().upper()
        if value in ("", "ALL"):
            return None
        try:
            return TransactionType(value)
        except ValueError:
            allowed = ", ".join(["ALL"] + [t.value for t in TransactionType])
            raise ValidationError(f"type must be one of {allowed}") from None

    def _parse_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self._default_limit
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationError("limit must be an integer")
        if limit < 1 or limit > self._max_limit:
            raise ValidationError(f"limit must be between 1 and {self._max_limit}")
        return limit

    @staticmethod
    def _parse_bound(value: DateBound, end_of_day: bool) -> Optional[datetime]:
        if isinstance(value, datetime):
            return to_eastern(value)
        return parse_date_bound(value, end_of_day=end_of_day)
