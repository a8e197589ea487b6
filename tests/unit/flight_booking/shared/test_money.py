from decimal import Decimal

import pytest

from flight_booking.shared.domain import Currency, Money, ValidationException


class TestMoney:
    """Money Value Object のテスト"""

    def test_add_same_currency(self):
        """同じ通貨同士は加算できる"""
        result = Money.jpy(Decimal("1000")).add(Money.jpy(Decimal("500")))
        assert result == Money.jpy(Decimal("1500"))

    def test_add_different_currency_raises(self):
        """異なる通貨の加算は ValidationException"""
        with pytest.raises(ValidationException):
            Money.jpy(Decimal("1000")).add(Money.usd(Decimal("10")))

    def test_negative_amount_raises(self):
        with pytest.raises(ValidationException):
            Money.jpy(Decimal("-1"))

    def test_total(self):
        """合計は全要素の和になる"""
        amounts = [Money.jpy(Decimal("10000")), Money.jpy(Decimal("30000"))]
        assert Money.total(amounts) == Money.jpy(Decimal("40000"))

    def test_total_of_empty_raises(self):
        with pytest.raises(ValidationException):
            Money.total([])


class TestCurrency:
    def test_code_is_normalized(self):
        assert Currency("jpy") == Currency.jpy()

    def test_unsupported_currency_raises(self):
        with pytest.raises(ValidationException):
            Currency("EUR")

    @pytest.mark.parametrize(
        "currency, minor_units", [("JPY", 0), ("USD", 2), ("VND", 0)]
    )
    def test_minor_units(self, currency, minor_units):
        assert Currency(currency).minor_units == minor_units


class TestMoneyPrecision:
    def test_yen_fraction_raises(self):
        """円未満の金額は扱わない"""
        with pytest.raises(ValidationException):
            Money.jpy(Decimal("100.5"))

    def test_cents_are_allowed_for_usd(self):
        assert Money.usd(Decimal("12.34")).amount == Decimal("12.34")

    def test_trailing_zero_exponent_is_accepted(self):
        assert Money.jpy(Decimal("1E+3")) == Money.jpy(Decimal("1000"))
