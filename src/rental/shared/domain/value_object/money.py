from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（通貨情報含む）"""

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        if self.currency != other.currency:
            raise ValueError("Cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def to_minor_units(self) -> int:
        """最小通貨単位の整数に変換する（端数は切り上げ）"""
        scaled = self.amount.scaleb(self.currency.minor_unit_exponent)
        return int(scaled.to_integral_value(rounding=ROUND_CEILING))

    @classmethod
    def from_minor_units(cls, units: int, currency: Currency) -> Money:
        """最小通貨単位の整数から Money を生成"""
        amount = Decimal(units).scaleb(-currency.minor_unit_exponent)
        return cls(amount=amount, currency=currency)

    @classmethod
    def inr(cls, amount: Decimal) -> Money:
        """インドルピーで Money を生成"""
        return cls(amount, Currency.inr())

    @classmethod
    def jpy(cls, amount: Decimal) -> Money:
        """日本円で Money を生成"""
        return cls(amount, Currency.jpy())

    @classmethod
    def usd(cls, amount: Decimal) -> Money:
        """米ドルで Money を生成"""
        return cls(amount, Currency.usd())
