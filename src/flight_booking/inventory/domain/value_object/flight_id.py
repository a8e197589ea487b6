from dataclasses import dataclass

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True)
class FlightId:
    """フライトID（Value Object）"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationException("FlightId cannot be empty")

    def __str__(self) -> str:
        return self.value
