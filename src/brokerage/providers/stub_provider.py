"""Stub and static price oracles for offline/testing use."""

import random
from decimal import Decimal
from typing import Mapping

from brokerage.core.exceptions import PriceUnavailableError


# Deterministic demo prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "META": Decimal("505.50"),
    "SPY": Decimal("485.25"),
    "QQQ": Decimal("418.75"),
    "VTI": Decimal("252.30"),
}


class StubPriceOracle:
    """
    Demo oracle with fixed prices for common symbols.

    Unknown symbols get a pseudo-random price that stays stable for the
    lifetime of the instance. These numbers carry no market meaning.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._generated: dict[str, Decimal] = {}

    def get_price(self, symbol: str) -> Decimal:
        """Return the stub price for a symbol."""
        upper_symbol = symbol.upper()
        if upper_symbol in _STUB_PRICES:
            return _STUB_PRICES[upper_symbol]

        if upper_symbol not in self._generated:
            base_price = Decimal(str(50 + self._rng.random() * 200))
            self._generated[upper_symbol] = base_price.quantize(Decimal("0.01"))
        return self._generated[upper_symbol]


class StaticPriceOracle:
    """Oracle backed by a fixed symbol -> price table."""

    def __init__(self, prices: Mapping[str, Decimal]):
        self._prices = {s.upper(): Decimal(str(p)) for s, p in prices.items()}

    def get_price(self, symbol: str) -> Decimal:
        """Return the configured price; unknown symbols are an error."""
        try:
            return self._prices[symbol.upper()]
        except KeyError:
            raise PriceUnavailableError(symbol.upper()) from None
