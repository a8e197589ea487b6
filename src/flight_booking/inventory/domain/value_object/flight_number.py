import re
from dataclasses import dataclass
from typing import ClassVar

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True)
class FlightNumber:
    """便名（IATA 航空会社コード + 1-4桁の番号）

    航空会社コードは英字2文字、または英字と数字の組み合わせ（例: 7G, G5）。
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?P<airline>[A-Z]{2}|[A-Z]\d|\d[A-Z])(?P<number>\d{1,4})$"
    )

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValidationException(f"Invalid flight number: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @property
    def airline_code(self) -> str:
        return self.PATTERN.match(self.value)["airline"]
