import re
from dataclasses import dataclass
from typing import ClassVar

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True, order=True)
class SeatId:
    """座席番号（フライト内で一意）

    列番号（1-3桁）+ 座席記号（1文字）の形式。例: 01A, 12C, 7F
    順序は文字列の辞書順で、座席の割り当ては若い番号から行う。
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{1,3}[A-Z]$")

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValidationException(
                f"Invalid seat number format: {self.value}. "
                "Expected format: 12A (1-3 digits + 1 letter)"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
