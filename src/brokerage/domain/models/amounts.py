"""Storage limits for share counts, prices and cash amounts."""

from decimal import Decimal, ROUND_HALF_EVEN

# Numeric(28, 10): 18 integer digits, 10 decimal places
AMOUNT_PRECISION = 28
AMOUNT_SCALE = 10

AMOUNT_UNIT = Decimal(1).scaleb(-AMOUNT_SCALE)
MAX_AMOUNT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)


def fits_storage(value: Decimal) -> bool:
    """True when value is stored exactly, without rounding or overflow."""
    if abs(value) >= MAX_AMOUNT:
        return False
    return value == value.quantize(AMOUNT_UNIT, rounding=ROUND_HALF_EVEN)


def quantize_amount(value: Decimal) -> Decimal:
    """Round a derived figure to the stored scale."""
    return value.quantize(AMOUNT_UNIT, rounding=ROUND_HALF_EVEN)
