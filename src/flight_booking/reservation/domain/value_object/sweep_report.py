from dataclasses import dataclass, field

from flight_booking.booking.domain import BookingNumber


@dataclass
class SweepReport:
    """期限切れスイープの実行結果"""

    released: list[BookingNumber] = field(default_factory=list)
    already_finalized: list[BookingNumber] = field(default_factory=list)
    repaired: list[BookingNumber] = field(default_factory=list)
    failed: dict[BookingNumber, str] = field(default_factory=dict)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
