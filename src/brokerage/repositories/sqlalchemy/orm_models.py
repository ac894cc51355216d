"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    Enum as SqlEnum,
)

from brokerage.repositories.sqlalchemy.database import Base
from brokerage.domain.models.enums import TransactionType, TransactionStatus
from brokerage.domain.models.amounts import AMOUNT_PRECISION, AMOUNT_SCALE

WALLET_ROW_ID = 1


def _amount_column(**kwargs) -> Column:
    return Column(Numeric(precision=AMOUNT_PRECISION, scale=AMOUNT_SCALE), **kwargs)


class WalletORM(Base):
    """SQLAlchemy model for the singleton Wallet."""

    __tablename__ = "wallet"

    id = Column(Integer, primary_key=True, default=WALLET_ROW_ID)
    balance = _amount_column(nullable=False, default=Decimal("0"))
    buying_power = _amount_column(nullable=False, default=Decimal("0"))
    updated_at = Column(DateTime, nullable=False)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class PositionORM(Base):
    """SQLAlchemy model for Position (one row per held symbol)."""

    __tablename__ = "positions"

    symbol = Column(String(20), primary_key=True)
    shares = _amount_column(nullable=False)
    avg_cost = _amount_column(nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only ledger entry)."""

    __tablename__ = "transactions"

    # Insertion order; breaks ties between equal timestamps
    seq = Column(Integer, primary_key=True, autoincrement=True)
    txn_id = Column(String(36), nullable=False, unique=True)
    txn_type = Column(SqlEnum(TransactionType), nullable=False, index=True)
    symbol = Column(String(20), nullable=True, index=True)
    shares = _amount_column(nullable=True)
    price = _amount_column(nullable=True)
    amount = _amount_column(nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)
    status = Column(
        SqlEnum(TransactionStatus),
        nullable=False,
        default=TransactionStatus.COMPLETED,
    )
