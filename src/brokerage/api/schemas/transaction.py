"""Pydantic schemas for transaction history endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from brokerage.domain.models import Transaction, TransactionType, TransactionStatus


class TransactionOut(BaseModel):
    """Response schema for a single transaction."""

    txn_id: str
    type: TransactionType
    symbol: Optional[str] = None
    shares: Optional[float] = None
    price: Optional[float] = None
    amount: float
    timestamp: datetime
    status: TransactionStatus

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionOut":
        return cls(
            txn_id=txn.txn_id,
            type=txn.txn_type,
            symbol=txn.symbol,
            shares=float(txn.shares) if txn.shares is not None else None,
            price=float(txn.price) if txn.price is not None else None,
            amount=float(txn.amount),
            timestamp=txn.timestamp,
            status=txn.status,
        )


class TransactionListResponse(BaseModel):
    """Response schema for the transaction history."""

    success: bool = True
    transactions: list[TransactionOut]
    count: int
