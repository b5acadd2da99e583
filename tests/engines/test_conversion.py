"""
Tests for base-currency conversion.

Covers:
- Exact multiplication with no intermediate rounding
- Float inputs converted without binary artifacts
- Rejection of non-decimal amounts and rates
- Currency-aware conversion of Money
"""

from decimal import Decimal

import pytest

from billing_engines.conversion import convert_money_to_base, convert_to_base
from billing_kernel.domain.values import ExchangeRate, Money
from billing_kernel.exceptions import CurrencyMismatchError, InvalidAmountError


class TestConvertToBase:
    """Tests for convert_to_base."""

    def test_exact_product(self):
        assert convert_to_base(Decimal("120.50"), Decimal("83.25")) == Decimal("10031.6250")

    def test_string_inputs(self):
        assert convert_to_base("100", "1") == Decimal("100")

    def test_no_rounding_applied(self):
        """Full precision survives; rounding is a display step."""
        result = convert_to_base("0.333", "3.3333")
        assert result == Decimal("1.1099889")

    def test_float_inputs_use_shortest_repr(self):
        assert convert_to_base(0.1, 3) == Decimal("0.3")

    def test_zero_amount(self):
        assert convert_to_base("0", "83.25") == Decimal("0")

    def test_negative_amount_passes_through(self):
        """Credits convert like any other amount."""
        assert convert_to_base("-10", "2") == Decimal("-20")

    def test_exchange_rate_object_accepted(self):
        rate = ExchangeRate.of("USD", "INR", "83.25")
        assert convert_to_base("2", rate) == Decimal("166.50")

    def test_money_amount_accepted(self):
        assert convert_to_base(Money.of("10", "USD"), "1.5") == Decimal("15.0")

    @pytest.mark.parametrize("amount", [None, "abc", "NaN", float("inf")])
    def test_invalid_amount_raises(self, amount):
        with pytest.raises(InvalidAmountError) as exc_info:
            convert_to_base(amount, "1")

        assert exc_info.value.field == "amount"

    def test_invalid_rate_raises(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            convert_to_base("10", "rate")

        assert exc_info.value.field == "exchange rate"


class TestConvertMoneyToBase:
    """Tests for convert_money_to_base."""

    def test_same_currency_needs_no_rate(self):
        money = Money.of("42.00", "INR")
        assert convert_money_to_base(money, "INR") is money

    def test_converts_with_matching_rate(self):
        rate = ExchangeRate.of("USD", "INR", "83.25")

        result = convert_money_to_base(Money.of("120.50", "USD"), "INR", rate)

        assert result == Money.of("10031.6250", "INR")

    def test_missing_rate_raises(self):
        with pytest.raises(ValueError, match="exchange rate is required"):
            convert_money_to_base(Money.of("1", "USD"), "INR")

    def test_rate_to_wrong_currency_raises(self):
        rate = ExchangeRate.of("USD", "EUR", "0.9")
        with pytest.raises(CurrencyMismatchError):
            convert_money_to_base(Money.of("1", "USD"), "INR", rate)

    def test_rate_from_wrong_currency_raises(self):
        rate = ExchangeRate.of("GBP", "INR", "105")
        with pytest.raises(CurrencyMismatchError):
            convert_money_to_base(Money.of("1", "USD"), "INR", rate)
