"""Core utilities and shared functionality."""

from brokerage.core.timezone import (
    now_eastern,
    to_eastern,
    to_storage,
    from_storage,
    parse_datetime_eastern,
    parse_date_bound,
    EASTERN_TZ,
)
from brokerage.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientBuyingPowerError,
    NoSuchPositionError,
    InsufficientSharesError,
    InsufficientFundsError,
    InvalidDateRangeError,
    PriceUnavailableError,
    StorageUnavailableError,
    OperationStatusUnknownError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "to_storage",
    "from_storage",
    "parse_datetime_eastern",
    "parse_date_bound",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientBuyingPowerError",
    "NoSuchPositionError",
    "InsufficientSharesError",
    "InsufficientFundsError",
    "InvalidDateRangeError",
    "PriceUnavailableError",
    "StorageUnavailableError",
    "OperationStatusUnknownError",
]
