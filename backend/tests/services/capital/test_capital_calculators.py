# backend/tests/services/capital/test_capital_calculators.py
"""
Unit tests for CapitalDeployedCalculator.

These tests verify the pure calculation logic WITHOUT database dependencies.

Test Coverage:
- Option trades: every action code for calls and puts
- Stock trades: absolute notional, sign of quantity and price ignored
- Totals: sums over collections, empty collections
- Validation: negative strike or multiplier rejected
"""

from decimal import Decimal

import pytest

from brokerledger.models import OptionCode, OptionType
from brokerledger.services.capital import CapitalDeployedCalculator, OptionTrade, StockTrade
from brokerledger.services.exceptions import ValidationError
from brokerledger.services.money import Money


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def calculator() -> CapitalDeployedCalculator:
    return CapitalDeployedCalculator()


def option(code: OptionCode, option_type: OptionType, strike: str = "50", multiplier: str = "100") -> OptionTrade:
    return OptionTrade(code=code, option_type=option_type, strike=strike, multiplier=multiplier)


CLOSING_CODES = [
    OptionCode.BUY_TO_CLOSE,
    OptionCode.SELL_TO_CLOSE,
    OptionCode.ASSIGNED,
    OptionCode.EXPIRED,
]


# =============================================================================
# OPTION TRADES
# =============================================================================

class TestOptionTradeCapitalDeployed:
    """Tests for calculate_option_trade_capital_deployed."""

    def test_sell_to_open_put_is_cash_secured(self, calculator):
        """Short put: strike 50 x 100 = 5000."""
        trade = option(OptionCode.SELL_TO_OPEN, OptionType.PUT)

        assert calculator.calculate_option_trade_capital_deployed(trade) == Money.from_amount("5000")

    def test_sell_to_open_call_is_covered(self, calculator):
        """Short call: no capital, treated as covered."""
        trade = option(OptionCode.SELL_TO_OPEN, OptionType.CALL)

        assert calculator.calculate_option_trade_capital_deployed(trade) == Money.zero()

    @pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
    def test_buy_to_open(self, calculator, option_type):
        """Long options of either type commit strike x multiplier."""
        trade = option(OptionCode.BUY_TO_OPEN, option_type, strike="12.5")

        assert calculator.calculate_option_trade_capital_deployed(trade) == Money.from_amount("1250")

    @pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
    @pytest.mark.parametrize("code", CLOSING_CODES)
    def test_closing_actions_deploy_nothing(self, calculator, code, option_type):
        """Closing, assignment and expiry never add capital."""
        trade = option(code, option_type)

        assert calculator.calculate_option_trade_capital_deployed(trade) == Money.zero()

    def test_default_multiplier(self, calculator):
        """The standard contract size is used when none is given."""
        trade = OptionTrade(code=OptionCode.BUY_TO_OPEN, option_type=OptionType.CALL, strike="3")

        assert calculator.calculate_option_trade_capital_deployed(trade) == Money.from_amount("300")

    def test_mini_contract_multiplier(self, calculator):
        """Non-standard multipliers are honored."""
        trade = option(OptionCode.SELL_TO_OPEN, OptionType.PUT, strike="40", multiplier="10")

        assert calculator.calculate_option_trade_capital_deployed(trade) == Money.from_amount("400")

    def test_zero_strike_and_multiplier_are_valid(self, calculator):
        """Zero inputs give zero capital rather than an error."""
        assert calculator.calculate_option_trade_capital_deployed(
            option(OptionCode.BUY_TO_OPEN, OptionType.PUT, strike="0")
        ) == Money.zero()
        assert calculator.calculate_option_trade_capital_deployed(
            option(OptionCode.BUY_TO_OPEN, OptionType.PUT, multiplier="0")
        ) == Money.zero()

    def test_negative_strike_rejected(self, calculator):
        trade = option(OptionCode.BUY_TO_OPEN, OptionType.CALL, strike="-1")

        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate_option_trade_capital_deployed(trade)

        assert exc_info.value.field == "strike"

    def test_negative_multiplier_rejected(self, calculator):
        trade = option(OptionCode.SELL_TO_OPEN, OptionType.PUT, multiplier="-100")

        with pytest.raises(ValidationError) as exc_info:
            calculator.calculate_option_trade_capital_deployed(trade)

        assert exc_info.value.field == "multiplier"

    def test_negative_strike_rejected_on_closing_trade(self, calculator):
        """Validation runs before the action code is looked at."""
        trade = option(OptionCode.EXPIRED, OptionType.CALL, strike="-5")

        with pytest.raises(ValidationError):
            calculator.calculate_option_trade_capital_deployed(trade)


# =============================================================================
# STOCK TRADES
# =============================================================================

class TestStockTradeCapitalDeployed:
    """Tests for calculate_stock_trade_capital_deployed."""

    def test_buy(self, calculator):
        """50 x 10 = 500."""
        trade = StockTrade(price="50", quantity="10")

        assert calculator.calculate_stock_trade_capital_deployed(trade) == Money.from_amount("500")

    def test_sell_uses_absolute_value(self, calculator):
        """A negative quantity deploys the same amount as a buy."""
        trade = StockTrade(price="50", quantity="-10")

        assert calculator.calculate_stock_trade_capital_deployed(trade) == Money.from_amount("500")

    def test_negative_price_uses_absolute_value(self, calculator):
        """-50 x 10 = 500."""
        trade = StockTrade(price="-50", quantity="10")

        assert calculator.calculate_stock_trade_capital_deployed(trade) == Money.from_amount("500")

    def test_fractional_shares(self, calculator):
        trade = StockTrade(price="101.25", quantity="0.4")

        assert calculator.calculate_stock_trade_capital_deployed(trade) == Money.from_amount("40.5")


# =============================================================================
# TOTALS
# =============================================================================

class TestTotals:
    """Tests for the collection totals."""

    def test_total_option_capital(self, calculator):
        """Short put 5000 + covered call 0 + long call 300 + closing 0."""
        trades = [
            option(OptionCode.SELL_TO_OPEN, OptionType.PUT),
            option(OptionCode.SELL_TO_OPEN, OptionType.CALL),
            option(OptionCode.BUY_TO_OPEN, OptionType.CALL, strike="3"),
            option(OptionCode.BUY_TO_CLOSE, OptionType.PUT),
        ]

        assert calculator.calculate_total_option_capital_deployed(trades) == Money.from_amount("5300")

    def test_total_stock_capital(self, calculator):
        trades = [
            StockTrade(price="50", quantity="10"),
            StockTrade(price="20", quantity="-5"),
        ]

        assert calculator.calculate_total_stock_capital_deployed(trades) == Money.from_amount("600")

    def test_empty_collections_are_zero(self, calculator):
        assert calculator.calculate_total_option_capital_deployed([]) == Money.zero()
        assert calculator.calculate_total_stock_capital_deployed([]) == Money.zero()

    def test_totals_accept_generators(self, calculator):
        """Any iterable works, not only lists."""
        trades = (StockTrade(price="1", quantity=str(q)) for q in range(1, 5))

        assert calculator.calculate_total_stock_capital_deployed(trades) == Money.from_amount("10")

    def test_invalid_trade_fails_the_total(self, calculator):
        trades = [
            option(OptionCode.SELL_TO_OPEN, OptionType.PUT),
            option(OptionCode.BUY_TO_OPEN, OptionType.PUT, strike="-1"),
        ]

        with pytest.raises(ValidationError):
            calculator.calculate_total_option_capital_deployed(trades)

    def test_totals_are_exact_decimals(self, calculator):
        """Ten 0.1 x 1 trades total exactly 1."""
        trades = [StockTrade(price="0.1", quantity="1")] * 10

        assert calculator.calculate_total_stock_capital_deployed(trades).value == Decimal("1.0")
