"""Wallet repository protocol."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Optional

from brokerage.domain.models import Wallet


class WalletRepository(Protocol):
    """Interface for the singleton wallet row."""

    def get(self) -> Optional[Wallet]:
        """Return the wallet, or None if it was never created."""
        ...

    def get_or_create(self, seed_balance: Decimal, at: datetime) -> Wallet:
        """Return the wallet, creating it with the seed balance on first access."""
        ...

    def save(self, wallet: Wallet) -> Wallet:
        """Overwrite the wallet's balances."""
        ...
