from datetime import timedelta
from typing import Sequence

from flight_booking.booking.domain.entity import Booking
from flight_booking.booking.domain.value_object import BookingId, BookingNumber, UserId
from flight_booking.inventory.domain import FlightId, HoldId, SeatId
from flight_booking.shared.domain import IsoDateTime, Money, ValidationException


class BookingFactory:
    """予約ファクトリ"""

    def __init__(self, hold_duration: timedelta) -> None:
        self._hold_duration = hold_duration

    def create(
        self,
        booking_number: BookingNumber,
        user_id: UserId,
        flight_id: FlightId,
        passenger_count: int,
        seat_ids: Sequence[SeatId],
        total_price: Money,
        hold_id: HoldId,
        now: IsoDateTime | None = None,
    ) -> Booking:
        """新規予約（PENDING / PENDING）を生成する"""
        if len(set(seat_ids)) != passenger_count:
            raise ValidationException(
                f"Expected {passenger_count} distinct seats, got {len(set(seat_ids))}"
            )

        created_at = now or IsoDateTime.now()
        return Booking(
            id=BookingId.generate(),
            booking_number=booking_number,
            user_id=user_id,
            flight_id=flight_id,
            passenger_count=passenger_count,
            seat_ids=seat_ids,
            total_price=total_price,
            hold_id=hold_id,
            created_at=created_at,
            hold_expires_at=created_at.plus(self._hold_duration),
        )
