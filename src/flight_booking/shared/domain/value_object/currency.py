from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Mapping

from flight_booking.shared.domain.exception import ValidationException


@dataclass(frozen=True)
class Currency:
    """通貨コード（ISO 4217）と補助単位の桁数"""

    # 通貨コード -> 小数点以下の桁数
    MINOR_UNITS: ClassVar[Mapping[str, int]] = MappingProxyType(
        {"JPY": 0, "USD": 2, "VND": 0}
    )

    code: str

    def __post_init__(self) -> None:
        normalized = self.code.strip().upper()
        if normalized not in self.MINOR_UNITS:
            raise ValidationException(
                f"Unsupported currency: {self.code}. "
                f"Supported: {', '.join(sorted(self.MINOR_UNITS))}"
            )
        object.__setattr__(self, "code", normalized)

    def __str__(self) -> str:
        return self.code

    @property
    def minor_units(self) -> int:
        return self.MINOR_UNITS[self.code]

    @classmethod
    def jpy(cls) -> Currency:
        return cls("JPY")

    @classmethod
    def usd(cls) -> Currency:
        return cls("USD")
