from flight_booking.booking.domain import (
    Booking,
    BookingId,
    BookingNotFoundException,
    BookingNumber,
    BookingRepository,
    BookingStatus,
    UserId,
)
from flight_booking.inventory.domain import FlightId
from flight_booking.shared.domain import IsoDateTime, PaymentStatus, ValidationException


class BookingQueryService:
    """予約の検索（読み取り専用）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def get(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundException(f"Booking not found: {booking_id}")
        return booking

    def get_by_number(self, booking_number: BookingNumber) -> Booking:
        booking = self._repository.find_by_booking_number(booking_number)
        if booking is None:
            raise BookingNotFoundException(f"Booking not found: {booking_number}")
        return booking

    def by_user(self, user_id: UserId, status: BookingStatus | None = None) -> list[Booking]:
        return self._repository.find_by_user_id(user_id, status)

    def by_flight(self, flight_id: FlightId) -> list[Booking]:
        return self._repository.find_by_flight_id(flight_id)

    def by_status(self, status: BookingStatus) -> list[Booking]:
        return self._repository.find_by_status(status)

    def by_payment_status(self, payment_status: PaymentStatus) -> list[Booking]:
        return self._repository.find_by_payment_status(payment_status)

    def created_between(self, start: IsoDateTime, end: IsoDateTime) -> list[Booking]:
        if end.is_before(start):
            raise ValidationException("Date range end must not precede start")
        return self._repository.find_created_between(start, end)

    def count_confirmed_by_flight(self, flight_id: FlightId) -> int:
        """フライトの確定済み予約数"""
        return sum(
            1
            for booking in self._repository.find_by_flight_id(flight_id)
            if booking.status is BookingStatus.CONFIRMED
        )

    def expired_holds(self, now: IsoDateTime) -> list[Booking]:
        return self._repository.find_expired_holds(now)

    def unreleased_cancellations(self) -> list[Booking]:
        return self._repository.find_unreleased_cancellations()
