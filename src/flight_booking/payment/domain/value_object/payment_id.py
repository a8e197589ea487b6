from __future__ import annotations

import uuid
from dataclasses import dataclass

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True)
class PaymentId:
    """決済記録ID（Value Object）"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValidationException("PaymentId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> PaymentId:
        return cls(value=str(uuid.uuid4()))
