"""Position domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Position:
    """
    Shares held in one symbol with their weighted-average cost.

    A position with zero shares is never stored; full liquidation removes it.
    """

    symbol: str
    shares: Decimal
    avg_cost: Decimal
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    @property
    def cost_basis(self) -> Decimal:
        """Total cost of the shares currently held."""
        return self.shares * self.avg_cost
