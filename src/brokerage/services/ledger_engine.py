"""
Ledger engine: the rules that keep wallet, positions and the transaction log
consistent.

Every function here is pure. It receives the current state plus the operation
parameters and either returns a LedgerDecision describing the new state or
raises a business-rule exception. Nothing is read from or written to storage.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from brokerage.core.exceptions import (
    ValidationError,
    InsufficientBuyingPowerError,
    NoSuchPositionError,
    InsufficientSharesError,
    InsufficientFundsError,
)
from brokerage.domain.models import (
    Wallet,
    Position,
    Transaction,
    TransactionType,
    TransactionStatus,
    AMOUNT_SCALE,
    AMOUNT_UNIT,
    MAX_AMOUNT,
    fits_storage,
    quantize_amount,
)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_PERCENT_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class LedgerDecision:
    """
    State transition produced by an accepted operation.

    position is the new state of the touched position (None for cash
    operations and for full liquidation); position_closed marks a row that
    must be deleted.
    """

    previous_wallet: Wallet
    wallet: Wallet
    transaction: Transaction
    position: Optional[Position] = None
    position_closed: bool = False
    cost_basis: Optional[Decimal] = None
    profit_loss: Optional[Decimal] = None

    @property
    def remaining_shares(self) -> Decimal:
        return self.position.shares if self.position is not None else _ZERO

    @property
    def profit_loss_percent(self) -> Optional[Decimal]:
        if self.profit_loss is None or self.cost_basis is None:
            return None
        if self.cost_basis == _ZERO:
            return _ZERO
        return (self.profit_loss / self.cost_basis * _HUNDRED).quantize(_PERCENT_PLACES)


# =============================================================================
# INPUT VALIDATION
# =============================================================================


def to_decimal(value: Any, field_name: str) -> Decimal:
    """Convert a numeric input to Decimal, rejecting non-finite values."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError(f"{field_name} must be a number") from None
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return result


def require_positive(value: Any, field_name: str) -> Decimal:
    """
    Convert to Decimal and require a value greater than zero that storage
    holds exactly.
    """
    result = to_decimal(value, field_name)
    if result <= _ZERO:
        raise ValidationError(f"{field_name} must be greater than 0")
    if result >= MAX_AMOUNT:
        raise ValidationError(f"{field_name} must be less than {MAX_AMOUNT}")
    if not fits_storage(result):
        raise ValidationError(f"{field_name} must have at most {AMOUNT_SCALE} decimal places")
    return result


def trade_value(shares: Decimal, price: Decimal) -> Decimal:
    """
    shares x price rounded to the stored scale.

    A trade worth less than the smallest storable amount is rejected. Values
    too large to store are returned unrounded for the caller to reject.
    """
    value = shares * price
    if value < AMOUNT_UNIT:
        raise ValidationError(f"trade value must be at least {AMOUNT_UNIT}")
    if value >= MAX_AMOUNT:
        return value
    return quantize_amount(value)


def _require_storable_balance(wallet: Wallet) -> None:
    if wallet.balance >= MAX_AMOUNT:
        raise ValidationError(f"balance must stay below {MAX_AMOUNT}")


def normalize_symbol(symbol: Any) -> str:
    """Symbols are stored and looked up in uppercase."""
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValidationError("symbol is required")
    return symbol.strip().upper()


# =============================================================================
# DECISIONS
# =============================================================================


def decide_buy(
    wallet: Wallet,
    position: Optional[Position],
    symbol: str,
    shares: Any,
    price: Any,
    *,
    txn_id: str,
    at: datetime,
) -> LedgerDecision:
    """
    Purchase shares, opening or averaging into the position.

    avg_cost = (avg_cost * held + price * shares) / (held + shares)
    """
    symbol = normalize_symbol(symbol)
    shares = require_positive(shares, "shares")
    price = require_positive(price, "price")
    _check_position_symbol(position, symbol)

    total_cost = trade_value(shares, price)
    if wallet.buying_power < total_cost:
        raise InsufficientBuyingPowerError(required=total_cost, available=wallet.buying_power)

    if position is None:
        new_position = Position(
            symbol=symbol,
            shares=shares,
            avg_cost=price,
            created_at=at,
            updated_at=at,
        )
    else:
        new_shares = position.shares + shares
        new_avg_cost = quantize_amount(
            (position.avg_cost * position.shares + price * shares) / new_shares
        )
        new_position = replace(position, shares=new_shares, avg_cost=new_avg_cost, updated_at=at)

    return LedgerDecision(
        previous_wallet=wallet,
        wallet=wallet.with_cash_delta(-total_cost, at),
        transaction=_trade_transaction(TransactionType.BUY, symbol, shares, price, total_cost, txn_id, at),
        position=new_position,
    )


def decide_sell(
    wallet: Wallet,
    position: Optional[Position],
    symbol: str,
    shares: Any,
    price: Any,
    *,
    txn_id: str,
    at: datetime,
) -> LedgerDecision:
    """
    Sell shares of an open position at the given price.

    avg_cost is left untouched; selling every held share closes the position.
    """
    symbol = normalize_symbol(symbol)
    shares = require_positive(shares, "shares")
    price = require_positive(price, "price")
    _check_position_symbol(position, symbol)

    if position is None:
        raise NoSuchPositionError(symbol)
    if position.shares < shares:
        raise InsufficientSharesError(symbol, requested=shares, available=position.shares)

    proceeds = trade_value(shares, price)
    new_wallet = wallet.with_cash_delta(proceeds, at)
    _require_storable_balance(new_wallet)
    cost_basis = quantize_amount(shares * position.avg_cost)

    if shares == position.shares:
        new_position = None
        closed = True
    else:
        new_position = replace(position, shares=position.shares - shares, updated_at=at)
        closed = False

    return LedgerDecision(
        previous_wallet=wallet,
        wallet=new_wallet,
        transaction=_trade_transaction(TransactionType.SELL, symbol, shares, price, proceeds, txn_id, at),
        position=new_position,
        position_closed=closed,
        cost_basis=cost_basis,
        profit_loss=proceeds - cost_basis,
    )


def decide_deposit(wallet: Wallet, amount: Any, *, txn_id: str, at: datetime) -> LedgerDecision:
    """Add cash to the wallet."""
    amount = require_positive(amount, "amount")
    new_wallet = wallet.with_cash_delta(amount, at)
    _require_storable_balance(new_wallet)
    return LedgerDecision(
        previous_wallet=wallet,
        wallet=new_wallet,
        transaction=_cash_transaction(TransactionType.DEPOSIT, amount, txn_id, at),
    )


def decide_withdrawal(wallet: Wallet, amount: Any, *, txn_id: str, at: datetime) -> LedgerDecision:
    """Remove cash from the wallet; the balance may not go negative."""
    amount = require_positive(amount, "amount")
    if amount > wallet.balance:
        raise InsufficientFundsError(requested=amount, available=wallet.balance)
    return LedgerDecision(
        previous_wallet=wallet,
        wallet=wallet.with_cash_delta(-amount, at),
        transaction=_cash_transaction(TransactionType.WITHDRAWAL, amount, txn_id, at),
    )


def _check_position_symbol(position: Optional[Position], symbol: str) -> None:
    if position is not None and position.symbol != symbol:
        raise ValueError(f"Position for {position.symbol} passed to an operation on {symbol}")


def _trade_transaction(
    txn_type: TransactionType,
    symbol: str,
    shares: Decimal,
    price: Decimal,
    amount: Decimal,
    txn_id: str,
    at: datetime,
) -> Transaction:
    return Transaction(
        txn_id=txn_id,
        txn_type=txn_type,
        amount=amount,
        timestamp=at,
        symbol=symbol,
        shares=shares,
        price=price,
        status=TransactionStatus.COMPLETED,
    )


def _cash_transaction(txn_type: TransactionType, amount: Decimal, txn_id: str, at: datetime) -> Transaction:
    return Transaction(
        txn_id=txn_id,
        txn_type=txn_type,
        amount=amount,
        timestamp=at,
        status=TransactionStatus.COMPLETED,
    )
