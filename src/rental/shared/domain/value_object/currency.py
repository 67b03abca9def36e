from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Currency:
    """通貨コード（ISO 4217）

    サポート対象: INR, JPY, USD
    """

    SUPPORTED: ClassVar[frozenset[str]] = frozenset({"INR", "JPY", "USD"})

    # 最小通貨単位の桁数（JPY は 1 円、それ以外は 0.01）
    MINOR_UNIT_EXPONENTS: ClassVar[dict[str, int]] = {"INR": 2, "JPY": 0, "USD": 2}

    code: str

    def __post_init__(self) -> None:
        normalized = self.code.upper()
        if normalized not in self.SUPPORTED:
            raise ValueError(
                f"Unsupported currency: {self.code}. "
                f"Supported: {', '.join(sorted(self.SUPPORTED))}"
            )
        object.__setattr__(self, "code", normalized)

    def __str__(self) -> str:
        return self.code

    @property
    def minor_unit_exponent(self) -> int:
        """最小通貨単位の小数桁数"""
        return self.MINOR_UNIT_EXPONENTS[self.code]

    @classmethod
    def inr(cls) -> Currency:
        """インドルピー"""
        return cls("INR")

    @classmethod
    def jpy(cls) -> Currency:
        """日本円"""
        return cls("JPY")

    @classmethod
    def usd(cls) -> Currency:
        """米ドル"""
        return cls("USD")
