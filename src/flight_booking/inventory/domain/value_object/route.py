from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True)
class AirportCode:
    """空港コード（IATA 3レター）"""

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z]{3}$")

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValidationException(f"Invalid airport code: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Route:
    """路線（出発空港 -> 到着空港）"""

    origin: AirportCode
    destination: AirportCode

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValidationException("Origin and destination must differ")

    @classmethod
    def of(cls, origin: str, destination: str) -> Route:
        return cls(origin=AirportCode(origin), destination=AirportCode(destination))

    def __str__(self) -> str:
        return f"{self.origin}-{self.destination}"
