from __future__ import annotations

from types import MappingProxyType

from flight_booking.booking.domain import Booking, BookingStatus
from flight_booking.shared.domain import LifecycleStatus


class ReservationState(LifecycleStatus):
    """予約処理（1回の予約の試み）の進行状態"""

    REQUESTED = "REQUESTED"
    SEATS_HELD = "SEATS_HELD"
    BOOKING_CREATED = "BOOKING_CREATED"
    AWAITING_PAYMENT = "AWAITING_PAYMENT"
    CONFIRMED = "CONFIRMED"
    RELEASED = "RELEASED"

    @classmethod
    def transitions(cls):
        return _TRANSITIONS

    @classmethod
    def of(cls, booking: Booking) -> ReservationState:
        """保存済みの予約から進行状態を求める"""
        if booking.status is BookingStatus.PENDING:
            return cls.AWAITING_PAYMENT
        if booking.status is BookingStatus.CANCELLED:
            return cls.RELEASED
        return cls.CONFIRMED


_TRANSITIONS = MappingProxyType(
    {
        ReservationState.REQUESTED: frozenset(
            {ReservationState.SEATS_HELD, ReservationState.RELEASED}
        ),
        ReservationState.SEATS_HELD: frozenset(
            {ReservationState.BOOKING_CREATED, ReservationState.RELEASED}
        ),
        ReservationState.BOOKING_CREATED: frozenset(
            {ReservationState.AWAITING_PAYMENT, ReservationState.RELEASED}
        ),
        ReservationState.AWAITING_PAYMENT: frozenset(
            {ReservationState.CONFIRMED, ReservationState.RELEASED}
        ),
        ReservationState.CONFIRMED: frozenset(),
        ReservationState.RELEASED: frozenset(),
    }
)
