from __future__ import annotations

import uuid
from dataclasses import dataclass

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True)
class HoldId:
    """座席確保の識別子

    確保した座席にはこの値が記録され、解放は同じ値を持つ座席に対してのみ行う。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValidationException("HoldId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> HoldId:
        return cls(value=str(uuid.uuid4()))
