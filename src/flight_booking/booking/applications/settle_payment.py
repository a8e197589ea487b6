from aws_lambda_powertools import Logger

from flight_booking.booking.domain import (
    AlreadyFinalizedException,
    Booking,
    BookingId,
    BookingNotFoundException,
    BookingRepository,
    BookingStatus,
)
from flight_booking.shared.domain import (
    ConflictException,
    OptimisticLockException,
    PaymentStatus,
)

logger = Logger(child=True)


class SettleBookingPaymentService:
    """決済結果を予約に反映するユースケース（成功による確定・返金）

    決済失敗は座席の返却を伴うため CancelBookingService で扱う。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def confirm_paid(self, booking_id: BookingId) -> Booking:
        """決済済みにして CONFIRMED へ遷移させる

        PENDING / PENDING を条件とする1回の条件付き更新で行い、
        期限切れ処理などに先を越された場合は AlreadyFinalizedException。
        """
        booking = self._get(booking_id)
        if not booking.is_awaiting_payment:
            raise AlreadyFinalizedException(
                f"Booking {booking.booking_number} is no longer awaiting payment"
            )

        booking.mark_paid()
        booking.confirm()
        try:
            self._repository.update(
                booking,
                expected_status=BookingStatus.PENDING,
                expected_payment_status=PaymentStatus.PENDING,
            )
        except OptimisticLockException as e:
            raise AlreadyFinalizedException(
                f"Booking {booking.booking_number} was finalized concurrently"
            ) from e

        logger.info(
            "Booking confirmed",
            extra={"booking_number": str(booking.booking_number)},
        )
        return booking

    def refund(self, booking_id: BookingId) -> Booking:
        """返金を反映する（予約ステータスと座席はそのまま）"""
        booking = self._get(booking_id)
        expected_status = booking.status
        booking.mark_refunded()
        try:
            self._repository.update(
                booking,
                expected_status=expected_status,
                expected_payment_status=PaymentStatus.PAID,
            )
        except OptimisticLockException as e:
            raise ConflictException(
                f"Booking {booking.booking_number} was updated concurrently"
            ) from e

        logger.info(
            "Booking payment refunded",
            extra={"booking_number": str(booking.booking_number)},
        )
        return booking

    def _get(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundException(f"Booking not found: {booking_id}")
        return booking
