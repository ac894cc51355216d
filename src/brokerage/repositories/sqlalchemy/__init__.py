"""SQLAlchemy repository implementations."""

from brokerage.repositories.sqlalchemy.database import Database, Base
from brokerage.repositories.sqlalchemy.wallet_repo import SqlAlchemyWalletRepository
from brokerage.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from brokerage.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from brokerage.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "Database",
    "Base",
    "SqlAlchemyWalletRepository",
    "SqlAlchemyPositionRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyUnitOfWork",
]
