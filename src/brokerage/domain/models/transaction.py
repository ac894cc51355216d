"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from brokerage.domain.models.enums import TransactionType, TransactionStatus


@dataclass(frozen=True)
class Transaction:
    """
    Ledger transaction entry (source of truth).

    Supports: BUY, SELL, DEPOSIT, WITHDRAWAL.
    - BUY/SELL carry symbol, shares, price
    - DEPOSIT/WITHDRAWAL carry only amount
    - amount is always positive; the direction of cash follows from txn_type
    """

    txn_id: str
    txn_type: TransactionType
    amount: Decimal
    timestamp: datetime
    symbol: Optional[str] = None
    shares: Optional[Decimal] = None
    price: Optional[Decimal] = None
    status: TransactionStatus = TransactionStatus.COMPLETED

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            object.__setattr__(self, "txn_type", TransactionType(self.txn_type))
        if isinstance(self.status, str):
            object.__setattr__(self, "status", TransactionStatus(self.status))

    @property
    def is_trade(self) -> bool:
        """Return True if this is a BUY or SELL transaction."""
        return self.txn_type in (TransactionType.BUY, TransactionType.SELL)

    @property
    def net_cash_impact(self) -> Decimal:
        """
        Signed effect of this transaction on the wallet.

        Positive = cash added, Negative = cash removed.
        """
        if self.txn_type in (TransactionType.DEPOSIT, TransactionType.SELL):
            return self.amount
        return -self.amount
