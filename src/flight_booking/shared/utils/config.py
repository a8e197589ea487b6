from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

from flight_booking.shared.domain.exception import ValidationException

DEFAULT_HOLD_DURATION_MINUTES = 15
DEFAULT_BOOKING_NUMBER_MAX_ATTEMPTS = 5


@dataclass(frozen=True)
class Settings:
    """環境変数から読み込むアプリケーション設定"""

    table_name: str | None
    hold_duration: timedelta
    booking_number_max_attempts: int

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            table_name=os.getenv("TABLE_NAME"),
            hold_duration=timedelta(
                minutes=_positive_int(
                    "HOLD_DURATION_MINUTES", DEFAULT_HOLD_DURATION_MINUTES
                )
            ),
            booking_number_max_attempts=_positive_int(
                "BOOKING_NUMBER_MAX_ATTEMPTS", DEFAULT_BOOKING_NUMBER_MAX_ATTEMPTS
            ),
        )


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValidationException(f"{name} must be an integer: {raw}") from e
    if value <= 0:
        raise ValidationException(f"{name} must be positive: {raw}")
    return value
