"""Application-level exceptions."""

from decimal import Decimal
from typing import Any, Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    status_code = 422

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientBuyingPowerError(AppError):
    """Raised when a purchase costs more than the available buying power."""

    def __init__(self, required: Decimal, available: Decimal):
        super().__init__(
            f"Insufficient buying power: required {required}, available {available}",
            code="INSUFFICIENT_BUYING_POWER",
            details={"required": required, "available": available},
        )


class NoSuchPositionError(AppError):
    """Raised when selling a symbol that is not held."""

    def __init__(self, symbol: str):
        super().__init__(
            f"No position found for {symbol}",
            code="NO_SUCH_POSITION",
            details={"symbol": symbol},
        )


class InsufficientSharesError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested: Decimal, available: Decimal):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
            details={"symbol": symbol, "requested": requested, "available": available},
        )


class InsufficientFundsError(AppError):
    """Raised when attempting to withdraw more cash than the balance."""

    def __init__(self, requested: Decimal, available: Decimal):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
            details={"requested": requested, "available": available},
        )


class InvalidDateRangeError(AppError):
    """Raised when a history query has an unusable date range."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_DATE_RANGE")


class PriceUnavailableError(AppError):
    """Raised when the price oracle cannot price a symbol."""

    status_code = 502

    def __init__(self, symbol: str):
        super().__init__(
            f"No price available for {symbol}",
            code="PRICE_UNAVAILABLE",
            details={"symbol": symbol},
        )


class StorageUnavailableError(AppError):
    """
    Raised when storage kept failing after bounded retries.

    Nothing was applied; the caller may retry the operation.
    """

    status_code = 503

    def __init__(
        self,
        message: str,
        code: str = "STORAGE_UNAVAILABLE",
        operation_id: Optional[str] = None,
    ):
        details: dict[str, Any] = {"retry_safe": True}
        if operation_id:
            details["operation_id"] = operation_id
        super().__init__(message, code=code, details=details)
        self.operation_id = operation_id


class OperationStatusUnknownError(StorageUnavailableError):
    """
    Raised when a commit was attempted but its outcome could not be confirmed.

    The operation_id can be looked up in the transaction log once storage
    recovers.
    """

    def __init__(self, operation_id: str):
        super().__init__(
            f"Operation status unknown (operation_id={operation_id}); retry is safe",
            code="OPERATION_STATUS_UNKNOWN",
            operation_id=operation_id,
        )
