from dataclasses import dataclass

from flight_booking.shared.domain import Money

from .flight_id import FlightId
from .hold_id import HoldId
from .seat_id import SeatId


@dataclass(frozen=True)
class SeatHold:
    """確保済み座席（予約作成前の仮押さえ）"""

    hold_id: HoldId
    flight_id: FlightId
    seat_ids: tuple[SeatId, ...]
    total_price: Money

    @property
    def count(self) -> int:
        return len(self.seat_ids)
