"""Price oracle protocol."""

from decimal import Decimal
from typing import Protocol


class PriceOracle(Protocol):
    """
    Source of current prices used to value open positions.

    Implementations raise PriceUnavailableError rather than guessing when a
    symbol cannot be priced.
    """

    def get_price(self, symbol: str) -> Decimal:
        """Return the current price for an uppercase symbol."""
        ...
