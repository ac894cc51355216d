"""Repository layer - data access abstractions and implementations."""

from brokerage.repositories.protocols import (
    WalletRepository,
    PositionRepository,
    TransactionRepository,
    UnitOfWork,
)

__all__ = [
    "WalletRepository",
    "PositionRepository",
    "TransactionRepository",
    "UnitOfWork",
]
