import re
from dataclasses import dataclass
from typing import ClassVar

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True)
class BookingNumber:
    """予約番号（利用者に提示する番号）

    "BK" + ミリ秒タイムスタンプ + 英大文字・数字6桁。
    例: BK1700000000000ABCDEF
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^BK(\d{13,})([A-Z0-9]{6})$")

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValidationException(f"Invalid booking number: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @property
    def issued_at_millis(self) -> int:
        """番号に埋め込まれた発行時刻（エポックミリ秒）"""
        return int(self.PATTERN.match(self.value).group(1))
