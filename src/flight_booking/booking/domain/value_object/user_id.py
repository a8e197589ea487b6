from dataclasses import dataclass

from flight_booking.shared.domain import ValidationException


@dataclass(frozen=True)
class UserId:
    """利用者ID

    認証基盤から渡される不透明な識別子で、存在確認は行わない。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationException("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value
