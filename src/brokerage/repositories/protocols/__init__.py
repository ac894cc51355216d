"""Repository protocol definitions (interfaces)."""

from brokerage.repositories.protocols.wallet_repo import WalletRepository
from brokerage.repositories.protocols.position_repo import PositionRepository
from brokerage.repositories.protocols.transaction_repo import TransactionRepository
from brokerage.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "WalletRepository",
    "PositionRepository",
    "TransactionRepository",
    "UnitOfWork",
]
