from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from flight_booking.booking.domain import Booking, BookingNumber, BookingStatus, UserId
from flight_booking.inventory.domain import FlightId, SeatId
from flight_booking.payment.domain import Payment
from flight_booking.reservation.domain.enum import ReservationState
from flight_booking.shared.domain import IsoDateTime, Money, PaymentStatus


@dataclass(frozen=True)
class PaymentRecord:
    transaction_id: str
    status: PaymentStatus
    recorded_at: IsoDateTime


@dataclass(frozen=True)
class BookingDetail:
    """予約の照会結果"""

    booking_number: BookingNumber
    user_id: UserId
    flight_id: FlightId
    passenger_count: int
    seat_ids: tuple[SeatId, ...]
    total_price: Money
    status: BookingStatus
    payment_status: PaymentStatus
    reservation_state: ReservationState
    created_at: IsoDateTime
    hold_expires_at: IsoDateTime
    payments: tuple[PaymentRecord, ...] = ()

    @classmethod
    def of(cls, booking: Booking, payments: Iterable[Payment] = ()) -> BookingDetail:
        return cls(
            booking_number=booking.booking_number,
            user_id=booking.user_id,
            flight_id=booking.flight_id,
            passenger_count=booking.passenger_count,
            seat_ids=booking.seat_ids,
            total_price=booking.total_price,
            status=booking.status,
            payment_status=booking.payment_status,
            reservation_state=ReservationState.of(booking),
            created_at=booking.created_at,
            hold_expires_at=booking.hold_expires_at,
            payments=tuple(
                PaymentRecord(
                    transaction_id=str(payment.transaction_id),
                    status=payment.status,
                    recorded_at=payment.recorded_at,
                )
                for payment in payments
            ),
        )
