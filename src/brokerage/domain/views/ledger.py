"""View models for ledger operation outcomes."""

from dataclasses import dataclass
from decimal import Decimal

from brokerage.domain.models import Transaction


@dataclass
class BuyResult:
    """Outcome of an accepted purchase."""

    transaction: Transaction
    total_cost: Decimal
    new_balance: Decimal
    new_buying_power: Decimal


@dataclass
class SellResult:
    """Outcome of an accepted sale, including realized profit/loss."""

    transaction: Transaction
    proceeds: Decimal
    cost_basis: Decimal
    profit_loss: Decimal
    profit_loss_percent: Decimal
    remaining_shares: Decimal
    new_balance: Decimal
    new_buying_power: Decimal


@dataclass
class CashResult:
    """Outcome of an accepted deposit or withdrawal."""

    transaction: Transaction
    previous_balance: Decimal
    new_balance: Decimal
    new_buying_power: Decimal


# Deposit and withdrawal outcomes carry the same figures
DepositResult = CashResult
WithdrawalResult = CashResult


@dataclass
class RebuildSummary:
    """Result of rebuilding wallet and positions from the transaction log."""

    transactions_replayed: int
    balance: Decimal
    positions: int
    realized_pnl: Decimal
