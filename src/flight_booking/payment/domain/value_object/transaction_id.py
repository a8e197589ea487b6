from dataclasses import dataclass

from flight_booking.shared.domain import ValidationException

MAX_LENGTH = 128


@dataclass(frozen=True)
class TransactionId:
    """決済ゲートウェイが払い出す取引ID

    全予約を通じて一意であり、同じ取引IDの二重記録は許されない。
    """

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip() if self.value else ""
        if not normalized:
            raise ValidationException("TransactionId cannot be empty")
        if len(normalized) > MAX_LENGTH:
            raise ValidationException(
                f"TransactionId must be at most {MAX_LENGTH} characters"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
