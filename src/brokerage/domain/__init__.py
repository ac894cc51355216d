"""Domain layer - pure business models with no external dependencies."""

from brokerage.domain.models import (
    Wallet,
    Position,
    Transaction,
    TransactionType,
    TransactionStatus,
)

__all__ = [
    "Wallet",
    "Position",
    "Transaction",
    "TransactionType",
    "TransactionStatus",
]
