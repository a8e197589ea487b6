from dataclasses import dataclass

from flight_booking.booking.domain import BookingNumber
from flight_booking.inventory.domain import FlightId, SeatId
from flight_booking.shared.domain import IsoDateTime, Money


@dataclass(frozen=True)
class ReservationResult:
    """予約の受付結果（決済待ち）"""

    booking_number: BookingNumber
    flight_id: FlightId
    seat_ids: tuple[SeatId, ...]
    total_price: Money
    hold_expires_at: IsoDateTime
