"""Portfolio engine for deriving wallet and positions from the ledger."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from brokerage.domain.models import (
    Wallet,
    Position,
    Transaction,
    TransactionType,
    TransactionStatus,
)
from brokerage.services import ledger_engine


@dataclass
class ReplayState:
    """Wallet, positions and running totals after replaying the log."""

    wallet: Wallet
    positions: dict[str, Position] = field(default_factory=dict)
    realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    total_deposits: Decimal = field(default_factory=lambda: Decimal("0"))
    total_withdrawals: Decimal = field(default_factory=lambda: Decimal("0"))
    buy_trades: int = 0
    sell_trades: int = 0
    transactions_replayed: int = 0
    inception_date: Optional[datetime] = None

    @property
    def open_cost_basis(self) -> Decimal:
        return sum((p.cost_basis for p in self.positions.values()), Decimal("0"))


class PortfolioEngine:
    """
    Engine for computing portfolio state from the ledger.

    The transaction log is the source of truth; wallet and positions are a
    cache of what replaying it through the ledger rules produces. Replay
    starts from the seed balance.
    """

    def __init__(self, seed_balance: Decimal = Decimal("10000")):
        self._seed_balance = seed_balance

    @property
    def seed_balance(self) -> Decimal:
        return self._seed_balance

    def replay(self, transactions: Iterable[Transaction]) -> ReplayState:
        """
        Replay completed transactions in timestamp order.

        Timestamps are compared as instants; the sort is stable, so entries
        with equal timestamps keep the order they were passed in (list_all
        returns them in insertion order).

        Realized P&L is measured against the weighted-average cost held at
        each sale, matching the figure reported by the sell itself. A log
        that breaks a ledger rule during replay raises the rule's error.
        """
        state = ReplayState(wallet=Wallet(self._seed_balance, self._seed_balance))

        for txn in sorted(transactions, key=lambda t: t.timestamp):
            if txn.status != TransactionStatus.COMPLETED:
                continue

            if state.inception_date is None:
                state.inception_date = txn.timestamp

            if txn.txn_type == TransactionType.BUY:
                decision = ledger_engine.decide_buy(
                    state.wallet,
                    state.positions.get(txn.symbol),
                    txn.symbol,
                    txn.shares,
                    txn.price,
                    txn_id=txn.txn_id,
                    at=txn.timestamp,
                )
                state.buy_trades += 1

            elif txn.txn_type == TransactionType.SELL:
                decision = ledger_engine.decide_sell(
                    state.wallet,
                    state.positions.get(txn.symbol),
                    txn.symbol,
                    txn.shares,
                    txn.price,
                    txn_id=txn.txn_id,
                    at=txn.timestamp,
                )
                state.realized_pnl += decision.profit_loss
                state.sell_trades += 1

            elif txn.txn_type == TransactionType.DEPOSIT:
                decision = ledger_engine.decide_deposit(
                    state.wallet, txn.amount, txn_id=txn.txn_id, at=txn.timestamp
                )
                state.total_deposits += txn.amount

            else:
                decision = ledger_engine.decide_withdrawal(
                    state.wallet, txn.amount, txn_id=txn.txn_id, at=txn.timestamp
                )
                state.total_withdrawals += txn.amount

            state.wallet = decision.wallet
            if decision.position_closed:
                state.positions.pop(txn.symbol, None)
            elif decision.position is not None:
                state.positions[decision.position.symbol] = decision.position
            state.transactions_replayed += 1

        return state
