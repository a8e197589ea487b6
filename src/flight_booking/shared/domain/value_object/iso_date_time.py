from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from flight_booking.shared.domain.exception import ValidationException


@dataclass(frozen=True, order=True)
class IsoDateTime:
    """日時(ISO 8601形式)

    システム全体でタイムゾーンなしのローカル時刻として扱う。
    タイムゾーン付きの入力はローカル時刻に変換してから保持する。
    """

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is not None:
            local = self.value.astimezone().replace(tzinfo=None)
            object.__setattr__(self, "value", local)

    @classmethod
    def from_string(cls, s: str) -> IsoDateTime:
        """ISO 8601 形式の文字列から生成"""
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationException(f"Invalid ISO 8601 datetime: {s}") from e
        return cls(value=dt)

    @classmethod
    def now(cls) -> IsoDateTime:
        return cls(value=datetime.now())

    def __str__(self) -> str:
        return self.value.isoformat()

    def plus(self, delta: timedelta) -> IsoDateTime:
        return IsoDateTime(value=self.value + delta)

    def is_before(self, other: IsoDateTime) -> bool:
        """他の日時より前かどうか"""
        return self.value < other.value

    def is_after(self, other: IsoDateTime) -> bool:
        """他の日時より後かどうか"""
        return self.value > other.value
