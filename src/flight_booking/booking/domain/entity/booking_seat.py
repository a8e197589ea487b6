from dataclasses import dataclass

from flight_booking.booking.domain.value_object import BookingId
from flight_booking.inventory.domain import FlightId, SeatId


@dataclass(frozen=True)
class BookingSeat:
    """予約と座席の関連

    この関連が存在する間、座席はその予約のために確保されている。
    """

    booking_id: BookingId
    flight_id: FlightId
    seat_id: SeatId
