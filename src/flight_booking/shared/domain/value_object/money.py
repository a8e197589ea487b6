from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from flight_booking.shared.domain.exception import ValidationException

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（通貨情報含む）"""

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValidationException("Amount cannot be negative")
        # 座席価格は通貨の最小単位で表す（JPY なら円未満を持たない）
        if -self.amount.as_tuple().exponent > self.currency.minor_units:
            raise ValidationException(
                f"{self.currency} amounts allow at most"
                f" {self.currency.minor_units} decimal places: {self.amount}"
            )

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        if self.currency != other.currency:
            raise ValidationException("Cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        return cls(Decimal("0"), currency)

    @classmethod
    def total(cls, amounts: Iterable[Money]) -> Money:
        """金額の合計（空の場合は ValidationException）"""
        items = list(amounts)
        if not items:
            raise ValidationException("Cannot total an empty list of amounts")
        result = cls.zero(items[0].currency)
        for item in items:
            result = result.add(item)
        return result

    @classmethod
    def jpy(cls, amount: Decimal) -> Money:
        """日本円で Money を生成"""
        return cls(amount, Currency.jpy())

    @classmethod
    def usd(cls, amount: Decimal) -> Money:
        """米ドルで Money を生成"""
        return cls(amount, Currency.usd())
