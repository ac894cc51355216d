"""Wallet domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Wallet:
    """
    Cash held by the single simulated account.

    balance and buying_power are separate fields but are always equal:
    every cash movement goes through with_cash_delta, which moves both by
    the same amount.
    """

    balance: Decimal
    buying_power: Decimal
    updated_at: Optional[datetime] = field(default=None)

    def with_cash_delta(self, delta: Decimal, at: datetime) -> "Wallet":
        """Return a copy with delta applied to both balance fields."""
        return Wallet(
            balance=self.balance + delta,
            buying_power=self.buying_power + delta,
            updated_at=at,
        )
