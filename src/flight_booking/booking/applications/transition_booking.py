from flight_booking.booking.applications.cancel_booking import CancelBookingService
from flight_booking.booking.domain import (
    Booking,
    BookingId,
    BookingNotFoundException,
    BookingRepository,
    BookingStatus,
)
from flight_booking.shared.domain import ConflictException, OptimisticLockException


class TransitionBookingService:
    """予約ステータスの遷移ユースケース

    CANCELLED への遷移は座席返却を伴うため CancelBookingService に委譲する。
    """

    def __init__(
        self, repository: BookingRepository, cancel_service: CancelBookingService
    ) -> None:
        self._repository = repository
        self._cancel_service = cancel_service

    def transition(self, booking_id: BookingId, target: BookingStatus) -> Booking:
        if target is BookingStatus.CANCELLED:
            return self._cancel_service.cancel(booking_id)

        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundException(f"Booking not found: {booking_id}")

        expected_status = booking.status
        booking.transition_to(target)
        try:
            self._repository.update(
                booking,
                expected_status=expected_status,
                expected_payment_status=booking.payment_status,
            )
        except OptimisticLockException as e:
            raise ConflictException(
                f"Booking {booking.booking_number} was updated concurrently"
            ) from e
        return booking
