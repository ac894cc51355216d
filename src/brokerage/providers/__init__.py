"""Price oracle providers module."""

from brokerage.providers.price_oracle import PriceOracle
from brokerage.providers.stub_provider import StubPriceOracle, StaticPriceOracle

__all__ = [
    "PriceOracle",
    "StubPriceOracle",
    "StaticPriceOracle",
]
