"""
Unit tests for the ledger engine decision functions.

Tests cover:
- Buy: new position, weighted-average cost, buying power check
- Sell: partial sell, full liquidation, realized P&L figures
- Deposit and withdrawal
- Input validation and symbol normalization
- buying_power == balance after every decision
"""

from decimal import Decimal

import pytest

from brokerage.core.exceptions import (
    ValidationError,
    InsufficientBuyingPowerError,
    NoSuchPositionError,
    InsufficientSharesError,
    InsufficientFundsError,
)
from brokerage.domain.models import Wallet, Position, TransactionType, TransactionStatus
from brokerage.services import ledger_engine

from tests.conftest import eastern_datetime


AT = eastern_datetime(2024, 6, 15, 10, 0)


@pytest.fixture
def wallet() -> Wallet:
    return Wallet(balance=Decimal("10000"), buying_power=Decimal("10000"))


def _position(symbol: str, shares: str, avg_cost: str) -> Position:
    return Position(
        symbol=symbol,
        shares=Decimal(shares),
        avg_cost=Decimal(avg_cost),
        created_at=AT,
        updated_at=AT,
    )


# =============================================================================
# BUY
# =============================================================================


class TestDecideBuy:
    """Tests for decide_buy."""

    def test_buy_opens_position_at_price(self, wallet: Wallet):
        """
        GIVEN a wallet with 10000 and no AAPL position
        WHEN I buy 10 AAPL at 150
        THEN a position of 10 shares at avg_cost 150 is opened
        AND the wallet decreases by 1500
        """
        decision = ledger_engine.decide_buy(
            wallet, None, "AAPL", Decimal("10"), Decimal("150"), txn_id="t1", at=AT
        )

        assert decision.position.symbol == "AAPL"
        assert decision.position.shares == Decimal("10")
        assert decision.position.avg_cost == Decimal("150")
        assert decision.position.created_at == AT
        assert decision.wallet.balance == Decimal("8500")
        assert decision.wallet.buying_power == Decimal("8500")
        assert decision.position_closed is False

    def test_buy_records_completed_transaction(self, wallet: Wallet):
        """
        GIVEN a wallet with 10000
        WHEN I buy 4 MSFT at 250
        THEN the transaction is a completed BUY with amount 1000
        """
        decision = ledger_engine.decide_buy(
            wallet, None, "MSFT", 4, 250, txn_id="txn-buy", at=AT
        )
        txn = decision.transaction

        assert txn.txn_id == "txn-buy"
        assert txn.txn_type == TransactionType.BUY
        assert txn.symbol == "MSFT"
        assert txn.shares == Decimal("4")
        assert txn.price == Decimal("250")
        assert txn.amount == Decimal("1000")
        assert txn.timestamp == AT
        assert txn.status == TransactionStatus.COMPLETED

    def test_buy_averages_into_existing_position(self, wallet: Wallet):
        """
        GIVEN a position of 10 AAPL at avg_cost 100
        WHEN I buy 10 more at 200
        THEN avg_cost becomes (100*10 + 200*10) / 20 = 150
        """
        held = _position("AAPL", "10", "100")
        decision = ledger_engine.decide_buy(
            wallet, held, "AAPL", Decimal("10"), Decimal("200"), txn_id="t2", at=AT
        )

        assert decision.position.shares == Decimal("20")
        assert decision.position.avg_cost == Decimal("150")
        assert decision.position.created_at == held.created_at

    def test_buy_weighted_average_with_uneven_lots(self, wallet: Wallet):
        """
        GIVEN a position of 10 AAPL at avg_cost 100
        WHEN I buy 30 more at 200
        THEN avg_cost is weighted by shares: 7000 / 40 = 175
        """
        held = _position("AAPL", "10", "100")
        decision = ledger_engine.decide_buy(
            wallet, held, "AAPL", Decimal("30"), Decimal("200"), txn_id="t3", at=AT
        )

        assert decision.position.avg_cost == Decimal("175")

    def test_buy_exceeding_buying_power_rejected(self, wallet: Wallet):
        """
        GIVEN buying power of 10000
        WHEN I buy 100 shares at 200 (cost 20000)
        THEN InsufficientBuyingPowerError carries required and available
        """
        with pytest.raises(InsufficientBuyingPowerError) as exc_info:
            ledger_engine.decide_buy(
                wallet, None, "AAPL", Decimal("100"), Decimal("200"), txn_id="t4", at=AT
            )

        assert exc_info.value.code == "INSUFFICIENT_BUYING_POWER"
        assert exc_info.value.details["required"] == Decimal("20000")
        assert exc_info.value.details["available"] == Decimal("10000")

    def test_buy_exactly_buying_power_accepted(self, wallet: Wallet):
        """
        GIVEN buying power of 10000
        WHEN I buy 50 shares at 200 (cost exactly 10000)
        THEN the buy is accepted and the wallet drops to zero
        """
        decision = ledger_engine.decide_buy(
            wallet, None, "AAPL", Decimal("50"), Decimal("200"), txn_id="t5", at=AT
        )

        assert decision.wallet.balance == Decimal("0")
        assert decision.wallet.buying_power == Decimal("0")

    def test_buy_normalizes_symbol(self, wallet: Wallet):
        """
        GIVEN a lowercase, padded symbol
        WHEN I buy
        THEN the position and transaction use the uppercase symbol
        """
        decision = ledger_engine.decide_buy(
            wallet, None, "  aapl ", Decimal("1"), Decimal("10"), txn_id="t6", at=AT
        )

        assert decision.position.symbol == "AAPL"
        assert decision.transaction.symbol == "AAPL"


# =============================================================================
# SELL
# =============================================================================


class TestDecideSell:
    """Tests for decide_sell."""

    def test_partial_sell_keeps_avg_cost(self, wallet: Wallet):
        """
        GIVEN 10 AAPL at avg_cost 100
        WHEN I sell 4 at 120
        THEN 6 shares remain at avg_cost 100
        AND the wallet increases by 480
        """
        held = _position("AAPL", "10", "100")
        decision = ledger_engine.decide_sell(
            wallet, held, "AAPL", Decimal("4"), Decimal("120"), txn_id="s1", at=AT
        )

        assert decision.position.shares == Decimal("6")
        assert decision.position.avg_cost == Decimal("100")
        assert decision.remaining_shares == Decimal("6")
        assert decision.position_closed is False
        assert decision.wallet.balance == Decimal("10480")
        assert decision.wallet.buying_power == Decimal("10480")

    def test_sell_reports_profit_and_loss(self, wallet: Wallet):
        """
        GIVEN 10 AAPL at avg_cost 100
        WHEN I sell 5 at 120
        THEN proceeds 600, cost basis 500, P&L 100, P&L percent 20.00
        """
        held = _position("AAPL", "10", "100")
        decision = ledger_engine.decide_sell(
            wallet, held, "AAPL", Decimal("5"), Decimal("120"), txn_id="s2", at=AT
        )

        assert decision.transaction.amount == Decimal("600")
        assert decision.transaction.txn_type == TransactionType.SELL
        assert decision.cost_basis == Decimal("500")
        assert decision.profit_loss == Decimal("100")
        assert decision.profit_loss_percent == Decimal("20.00")

    def test_sell_at_loss_reports_negative_percent_rounded(self, wallet: Wallet):
        """
        GIVEN 3 TSLA at avg_cost 300
        WHEN I sell 3 at 200
        THEN P&L is -300 and percent is -33.33
        """
        held = _position("TSLA", "3", "300")
        decision = ledger_engine.decide_sell(
            wallet, held, "TSLA", Decimal("3"), Decimal("200"), txn_id="s3", at=AT
        )

        assert decision.profit_loss == Decimal("-300")
        assert decision.profit_loss_percent == Decimal("-33.33")

    def test_full_sell_closes_position(self, wallet: Wallet):
        """
        GIVEN 10 AAPL
        WHEN I sell all 10
        THEN the position is marked closed and no position remains
        """
        held = _position("AAPL", "10", "100")
        decision = ledger_engine.decide_sell(
            wallet, held, "AAPL", Decimal("10"), Decimal("90"), txn_id="s4", at=AT
        )

        assert decision.position_closed is True
        assert decision.position is None
        assert decision.remaining_shares == Decimal("0")

    def test_sell_without_position_rejected(self, wallet: Wallet):
        """
        GIVEN no MSFT position
        WHEN I sell MSFT
        THEN NoSuchPositionError is raised
        """
        with pytest.raises(NoSuchPositionError) as exc_info:
            ledger_engine.decide_sell(
                wallet, None, "MSFT", Decimal("1"), Decimal("100"), txn_id="s5", at=AT
            )

        assert exc_info.value.details["symbol"] == "MSFT"

    def test_sell_more_than_held_rejected(self, wallet: Wallet):
        """
        GIVEN 5 AAPL
        WHEN I sell 6
        THEN InsufficientSharesError carries requested and available
        """
        held = _position("AAPL", "5", "100")
        with pytest.raises(InsufficientSharesError) as exc_info:
            ledger_engine.decide_sell(
                wallet, held, "AAPL", Decimal("6"), Decimal("100"), txn_id="s6", at=AT
            )

        assert exc_info.value.details["requested"] == Decimal("6")
        assert exc_info.value.details["available"] == Decimal("5")

    def test_sell_with_mismatched_position_is_programming_error(self, wallet: Wallet):
        """
        GIVEN an AAPL position
        WHEN it is passed to a sell of MSFT
        THEN ValueError is raised
        """
        held = _position("AAPL", "5", "100")
        with pytest.raises(ValueError):
            ledger_engine.decide_sell(
                wallet, held, "MSFT", Decimal("1"), Decimal("100"), txn_id="s7", at=AT
            )


# =============================================================================
# CASH
# =============================================================================


class TestDecideCash:
    """Tests for decide_deposit and decide_withdrawal."""

    def test_deposit_increases_both_fields(self, wallet: Wallet):
        """
        GIVEN a wallet with 10000
        WHEN I deposit 2500.50
        THEN balance and buying power are both 12500.50
        """
        decision = ledger_engine.decide_deposit(wallet, Decimal("2500.50"), txn_id="d1", at=AT)

        assert decision.wallet.balance == Decimal("12500.50")
        assert decision.wallet.buying_power == Decimal("12500.50")
        assert decision.previous_wallet.balance == Decimal("10000")
        assert decision.transaction.txn_type == TransactionType.DEPOSIT
        assert decision.transaction.symbol is None
        assert decision.transaction.shares is None

    def test_withdrawal_decreases_both_fields(self, wallet: Wallet):
        """
        GIVEN a wallet with 10000
        WHEN I withdraw 10000
        THEN the balance drops to exactly zero
        """
        decision = ledger_engine.decide_withdrawal(wallet, Decimal("10000"), txn_id="w1", at=AT)

        assert decision.wallet.balance == Decimal("0")
        assert decision.wallet.buying_power == Decimal("0")
        assert decision.transaction.txn_type == TransactionType.WITHDRAWAL

    def test_withdrawal_exceeding_balance_rejected(self, wallet: Wallet):
        """
        GIVEN a wallet with 10000
        WHEN I withdraw 10000.01
        THEN InsufficientFundsError is raised
        """
        with pytest.raises(InsufficientFundsError) as exc_info:
            ledger_engine.decide_withdrawal(wallet, Decimal("10000.01"), txn_id="w2", at=AT)

        assert exc_info.value.code == "INSUFFICIENT_FUNDS"
        assert exc_info.value.details["available"] == Decimal("10000")


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidation:
    """Tests for input validation helpers."""

    @pytest.mark.parametrize("value", [0, -1, "0", Decimal("-0.01")])
    def test_non_positive_shares_rejected(self, wallet: Wallet, value):
        """
        GIVEN a non-positive share count
        WHEN I buy
        THEN ValidationError is raised
        """
        with pytest.raises(ValidationError):
            ledger_engine.decide_buy(wallet, None, "AAPL", value, Decimal("10"), txn_id="v1", at=AT)

    @pytest.mark.parametrize("value", ["abc", None, True, "NaN", "Infinity"])
    def test_non_numeric_values_rejected(self, value):
        """
        GIVEN a value that is not a finite number
        WHEN it is validated
        THEN ValidationError is raised
        """
        with pytest.raises(ValidationError):
            ledger_engine.require_positive(value, "amount")

    def test_numeric_strings_and_floats_accepted(self):
        """
        GIVEN numeric input as string or float
        WHEN it is validated
        THEN the exact decimal value is returned
        """
        assert ledger_engine.require_positive("12.5", "price") == Decimal("12.5")
        assert ledger_engine.require_positive(0.1, "price") == Decimal("0.1")

    @pytest.mark.parametrize("symbol", ["", "   ", None, 42])
    def test_missing_symbol_rejected(self, symbol):
        """
        GIVEN an empty or non-string symbol
        WHEN it is normalized
        THEN ValidationError is raised
        """
        with pytest.raises(ValidationError):
            ledger_engine.normalize_symbol(symbol)

    def test_zero_deposit_rejected(self, wallet: Wallet):
        """
        GIVEN a zero amount
        WHEN I deposit
        THEN ValidationError is raised
        """
        with pytest.raises(ValidationError) as exc_info:
            ledger_engine.decide_deposit(wallet, 0, txn_id="v2", at=AT)

        assert exc_info.value.status_code == 422


# =============================================================================
# STORAGE LIMITS
# =============================================================================


class TestStorageLimits:
    """Inputs and derived figures must fit Numeric(28, 10) exactly."""

    @pytest.mark.parametrize("value", ["0.00000000001", "1.00000000005", "12.345678901234"])
    def test_more_than_ten_decimal_places_rejected(self, value):
        """
        GIVEN a value with more than 10 decimal places
        WHEN it is validated
        THEN ValidationError is raised instead of rounding in storage
        """
        with pytest.raises(ValidationError) as exc_info:
            ledger_engine.require_positive(Decimal(value), "shares")

        assert "decimal places" in exc_info.value.message

    def test_ten_decimal_places_accepted(self):
        """
        GIVEN the smallest storable quantity, with trailing zeros past the scale
        WHEN it is validated
        THEN it is accepted unchanged
        """
        assert ledger_engine.require_positive(Decimal("0.0000000001"), "shares") == Decimal("0.0000000001")
        assert ledger_engine.require_positive(Decimal("1.500000000000"), "price") == Decimal("1.5")

    def test_values_beyond_integer_digits_rejected(self):
        """
        GIVEN a value of 10^18
        WHEN it is validated
        THEN ValidationError is raised
        """
        with pytest.raises(ValidationError):
            ledger_engine.require_positive(Decimal("1000000000000000000"), "amount")

    def test_trade_worth_less_than_smallest_amount_rejected(self, wallet: Wallet):
        """
        GIVEN 0.0000000001 shares at 0.5
        WHEN I buy
        THEN ValidationError is raised because the cost rounds to zero
        """
        with pytest.raises(ValidationError):
            ledger_engine.decide_buy(wallet, None, "AAPL", "0.0000000001", "0.5", txn_id="t", at=AT)

    def test_derived_figures_rounded_to_stored_scale(self, wallet: Wallet):
        """
        GIVEN 1 AAPL at 10
        WHEN I buy 2 more at 11 and then sell 1 at 12
        THEN avg_cost is 10.6666666667 and cost basis and P&L use it
        """
        bought = ledger_engine.decide_buy(
            wallet, _position("AAPL", "1", "10"), "AAPL", 2, 11, txn_id="b", at=AT
        )
        sold = ledger_engine.decide_sell(
            bought.wallet, bought.position, "AAPL", 1, 12, txn_id="s", at=AT
        )

        assert bought.position.avg_cost == Decimal("10.6666666667")
        assert sold.cost_basis == Decimal("10.6666666667")
        assert sold.profit_loss == Decimal("1.3333333333")

    def test_deposit_past_storable_balance_rejected(self):
        """
        GIVEN a wallet just below the largest storable balance
        WHEN I deposit enough to overflow it
        THEN ValidationError is raised
        """
        big = Decimal("999999999999999999")
        wallet = Wallet(balance=big, buying_power=big)

        with pytest.raises(ValidationError):
            ledger_engine.decide_deposit(wallet, 1, txn_id="d", at=AT)
