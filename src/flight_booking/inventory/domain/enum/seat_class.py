from __future__ import annotations

from enum import Enum

from flight_booking.shared.domain import ValidationException


class SeatClass(str, Enum):
    """座席クラス"""

    ECONOMY = "ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"

    @classmethod
    def parse(cls, value: str) -> SeatClass:
        """文字列から座席クラスを取得する（大文字小文字は区別しない）"""
        try:
            return cls(value.upper())
        except (ValueError, AttributeError) as e:
            raise ValidationException(f"Unknown seat class: {value}") from e
