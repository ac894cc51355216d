"""Ledger service: the single entry point for state-changing operations."""

import logging
import threading
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from brokerage.core.exceptions import (
    AppError,
    StorageUnavailableError,
    OperationStatusUnknownError,
)
from brokerage.core.timezone import now_eastern
from brokerage.domain.models import Wallet, Position
from brokerage.domain.views import (
    BuyResult,
    SellResult,
    DepositResult,
    WithdrawalResult,
    RebuildSummary,
)
from brokerage.repositories.protocols import UnitOfWork
from brokerage.services import ledger_engine
from brokerage.services.ledger_engine import LedgerDecision
from brokerage.services.portfolio_engine import PortfolioEngine
from brokerage.services.storage_retry import run_with_retries

logger = logging.getLogger(__name__)

Decide = Callable[[Wallet, Optional[Position], str, datetime], LedgerDecision]


class LedgerService:
    """
    Service for executing ledger operations.

    Each operation reads the wallet (and position), asks the ledger engine for
    a decision, and writes wallet, position and transaction in one commit.
    Operations are serialized by a lock held for the whole read-decide-write
    unit, so one instance must be shared by every caller in the process.
    """

    def __init__(
        self,
        unit_of_work_factory: Callable[[], UnitOfWork],
        portfolio_engine: Optional[PortfolioEngine] = None,
        seed_balance: Decimal = Decimal("10000"),
        write_retry_attempts: int = 3,
        write_retry_backoff_seconds: float = 0.05,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._uow_factory = unit_of_work_factory
        self._portfolio = portfolio_engine or PortfolioEngine(seed_balance)
        self._seed_balance = seed_balance
        self._attempts = write_retry_attempts
        self._backoff = write_retry_backoff_seconds
        self._clock = clock
        self._write_lock = threading.Lock()

    def get_wallet(self) -> Wallet:
        """Return the wallet, creating it with the seed balance on first access."""

        def _work(attempt: int) -> Wallet:
            with self._uow_factory() as uow:
                wallet = uow.wallets.get_or_create(self._seed_balance, self._clock())
                uow.commit()
                return wallet

        return run_with_retries("Load wallet", _work, self._attempts, self._backoff)

    def execute_buy(self, symbol: Any, shares: Any, price: Any) -> BuyResult:
        """Buy shares of a symbol at the given price."""
        symbol = ledger_engine.normalize_symbol(symbol)
        shares = ledger_engine.require_positive(shares, "shares")
        price = ledger_engine.require_positive(price, "price")
        ledger_engine.trade_value(shares, price)

        decision = self._execute(
            "BUY",
            lambda wallet, position, txn_id, at: ledger_engine.decide_buy(
                wallet, position, symbol, shares, price, txn_id=txn_id, at=at
            ),
            symbol=symbol,
        )
        logger.info(
            "Bought %s %s at %s (balance %s)",
            shares,
            symbol,
            price,
            decision.wallet.balance,
        )
        return BuyResult(
            transaction=decision.transaction,
            total_cost=decision.transaction.amount,
            new_balance=decision.wallet.balance,
            new_buying_power=decision.wallet.buying_power,
        )

    def execute_sell(self, symbol: Any, shares: Any, price: Any) -> SellResult:
        """Sell shares of a held symbol at the given price."""
        symbol = ledger_engine.normalize_symbol(symbol)
        shares = ledger_engine.require_positive(shares, "shares")
        price = ledger_engine.require_positive(price, "price")
        ledger_engine.trade_value(shares, price)

        decision = self._execute(
            "SELL",
            lambda wallet, position, txn_id, at: ledger_engine.decide_sell(
                wallet, position, symbol, shares, price, txn_id=txn_id, at=at
            ),
            symbol=symbol,
        )
        logger.info(
            "Sold %s %s at %s (P&L %s, balance %s)",
            shares,
            symbol,
            price,
            decision.profit_loss,
            decision.wallet.balance,
        )
        return SellResult(
            transaction=decision.transaction,
            proceeds=decision.transaction.amount,
            cost_basis=decision.cost_basis,
            profit_loss=decision.profit_loss,
            profit_loss_percent=decision.profit_loss_percent,
            remaining_shares=decision.remaining_shares,
            new_balance=decision.wallet.balance,
            new_buying_power=decision.wallet.buying_power,
        )

    def execute_deposit(self, amount: Any) -> DepositResult:
        """Deposit cash into the wallet."""
        amount = ledger_engine.require_positive(amount, "amount")
        decision = self._execute(
            "DEPOSIT",
            lambda wallet, position, txn_id, at: ledger_engine.decide_deposit(
                wallet, amount, txn_id=txn_id, at=at
            ),
        )
        logger.info("Deposited %s (balance %s)", amount, decision.wallet.balance)
        return self._cash_result(decision)

    def execute_withdrawal(self, amount: Any) -> WithdrawalResult:
        """Withdraw cash from the wallet."""
        amount = ledger_engine.require_positive(amount, "amount")
        decision = self._execute(
            "WITHDRAWAL",
            lambda wallet, position, txn_id, at: ledger_engine.decide_withdrawal(
                wallet, amount, txn_id=txn_id, at=at
            ),
        )
        logger.info("Withdrew %s (balance %s)", amount, decision.wallet.balance)
        return self._cash_result(decision)

    def rebuild_from_log(self) -> RebuildSummary:
        """
        Recompute wallet and positions by replaying the transaction log.

        Used to recover the cached state after it drifted from the log. The
        log itself is never modified.
        """

        def _work(attempt: int) -> RebuildSummary:
            with self._write_lock, self._uow_factory() as uow:
                at = self._clock()
                state = self._portfolio.replay(uow.transactions.list_all())

                uow.wallets.get_or_create(self._seed_balance, at)
                uow.wallets.save(
                    Wallet(
                        balance=state.wallet.balance,
                        buying_power=state.wallet.buying_power,
                        updated_at=at,
                    )
                )

                for stale in uow.positions.list_all():
                    if stale.symbol not in state.positions:
                        uow.positions.delete(stale.symbol)
                for position in state.positions.values():
                    uow.positions.save(position)

                uow.commit()
                return RebuildSummary(
                    transactions_replayed=state.transactions_replayed,
                    balance=state.wallet.balance,
                    positions=len(state.positions),
                    realized_pnl=state.realized_pnl,
                )

        summary = run_with_retries("Rebuild from log", _work, self._attempts, self._backoff)
        logger.info(
            "Rebuilt ledger state from %s transactions (balance %s, %s positions)",
            summary.transactions_replayed,
            summary.balance,
            summary.positions,
        )
        return summary

    def _execute(self, operation: str, decide: Decide, symbol: Optional[str] = None) -> LedgerDecision:
        """
        Run one read-decide-write unit with bounded retries.

        The operation id doubles as the transaction id. A retry first looks it
        up, so a commit whose acknowledgement was lost is not applied twice.
        Business-rule rejections propagate immediately and write nothing.
        """
        operation_id = str(uuid.uuid4())
        decision: Optional[LedgerDecision] = None
        commit_attempted = False

        def _work(attempt: int) -> LedgerDecision:
            nonlocal decision, commit_attempted
            with self._write_lock, self._uow_factory() as uow:
                if commit_attempted and uow.transactions.get_by_id(operation_id) is not None:
                    logger.warning(
                        "%s %s was committed before its failure was reported",
                        operation,
                        operation_id,
                    )
                    return decision

                wallet = uow.wallets.get_or_create(self._seed_balance, self._clock())
                position = uow.positions.get(symbol) if symbol else None
                decision = decide(wallet, position, operation_id, self._clock())

                uow.wallets.save(decision.wallet)
                if decision.position_closed:
                    uow.positions.delete(symbol)
                elif decision.position is not None:
                    uow.positions.save(decision.position)
                uow.transactions.add(decision.transaction)

                commit_attempted = True
                uow.commit()
                return decision

        try:
            return run_with_retries(operation, _work, self._attempts, self._backoff)
        except StorageUnavailableError as exc:
            if not commit_attempted:
                raise
            return self._confirm(operation, operation_id, decision, exc)
        except AppError as exc:
            logger.info("%s rejected: %s", operation, exc.message)
            raise

    def _confirm(
        self,
        operation: str,
        operation_id: str,
        decision: LedgerDecision,
        error: StorageUnavailableError,
    ) -> LedgerDecision:
        """Resolve an operation whose last commit may or may not have landed."""
        try:
            with self._uow_factory() as uow:
                committed = uow.transactions.get_by_id(operation_id) is not None
        except Exception as exc:
            logger.error("Could not confirm %s %s: %s", operation, operation_id, exc)
            raise OperationStatusUnknownError(operation_id) from exc

        if committed:
            logger.warning("%s %s confirmed committed after storage errors", operation, operation_id)
            return decision
        raise StorageUnavailableError(error.message, operation_id=operation_id) from error

    @staticmethod
    def _cash_result(decision: LedgerDecision) -> DepositResult:
        return DepositResult(
            transaction=decision.transaction,
            previous_balance=decision.previous_wallet.balance,
            new_balance=decision.wallet.balance,
            new_buying_power=decision.wallet.buying_power,
        )
