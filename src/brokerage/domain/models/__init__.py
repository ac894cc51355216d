"""Domain models package."""

from brokerage.domain.models.enums import TransactionType, TransactionStatus
from brokerage.domain.models.wallet import Wallet
from brokerage.domain.models.position import Position
from brokerage.domain.models.transaction import Transaction
from brokerage.domain.models.amounts import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    AMOUNT_UNIT,
    MAX_AMOUNT,
    fits_storage,
    quantize_amount,
)

__all__ = [
    "TransactionType",
    "TransactionStatus",
    "Wallet",
    "Position",
    "Transaction",
    "AMOUNT_PRECISION",
    "AMOUNT_SCALE",
    "AMOUNT_UNIT",
    "MAX_AMOUNT",
    "fits_storage",
    "quantize_amount",
]
