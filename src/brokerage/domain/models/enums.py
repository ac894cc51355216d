"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    BUY = "BUY"
    SELL = "SELL"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


class TransactionStatus(str, Enum):
    """Settlement status of a ledger transaction."""

    COMPLETED = "completed"
    PENDING = "pending"  # reserved for asynchronous settlement
    FAILED = "failed"  # reserved for asynchronous settlement
