from aws_lambda_powertools import Logger

from flight_booking.booking.domain import (
    AlreadyFinalizedException,
    AlreadyTerminalException,
    Booking,
    BookingId,
    BookingNotFoundException,
    BookingRepository,
    CancellationReason,
)
from flight_booking.inventory.applications.release_seats import ReleaseSeatsService
from flight_booking.inventory.domain import SeatId
from flight_booking.shared.domain import ConflictException, OptimisticLockException

logger = Logger(child=True)


class CancelBookingService:
    """予約キャンセルユースケース

    1. 予約を条件付き更新で CANCELLED にする（終結の確定）
    2. 座席在庫に座席を返却する
    3. 予約と座席の関連を削除する

    2 以降が途中で失敗しても、関連が残った予約はスイープで再実行される。
    """

    def __init__(
        self, repository: BookingRepository, release_service: ReleaseSeatsService
    ) -> None:
        self._repository = repository
        self._release_service = release_service

    def cancel(
        self,
        booking_id: BookingId,
        reason: CancellationReason = CancellationReason.USER_REQUEST,
    ) -> Booking:
        booking = self._get(booking_id)
        if reason.finalizes_hold and not booking.is_awaiting_payment:
            raise AlreadyFinalizedException(
                f"Booking {booking.booking_number} is no longer awaiting payment"
            )

        expected_status = booking.status
        expected_payment_status = booking.payment_status
        if reason is CancellationReason.PAYMENT_FAILED:
            booking.mark_payment_failed()
        booking.cancel(reason)

        try:
            self._repository.update(
                booking,
                expected_status=expected_status,
                expected_payment_status=expected_payment_status,
            )
        except OptimisticLockException as e:
            raise self._conflict(booking_id, reason) from e

        logger.info(
            "Booking cancelled",
            extra={
                "booking_number": str(booking.booking_number),
                "reason": reason.value,
            },
        )
        self.release_held_seats(booking)
        return booking

    def release_held_seats(self, booking: Booking) -> list[SeatId]:
        """キャンセル済み予約の座席を返却し、関連を削除する（何度呼んでもよい）"""
        if not booking.seats:
            return []

        released = self._release_service.release(
            booking.flight_id, booking.seat_ids, booking.hold_id
        )
        detached = booking.detach_seats()
        self._repository.remove_booking_seats(detached)
        logger.info(
            "Booking seats released",
            extra={
                "booking_number": str(booking.booking_number),
                "flight_id": str(booking.flight_id),
                "seat_ids": [str(seat.seat_id) for seat in detached],
            },
        )
        return released

    def _conflict(self, booking_id: BookingId, reason: CancellationReason) -> Exception:
        latest = self._get(booking_id)
        if reason.finalizes_hold and not latest.is_awaiting_payment:
            return AlreadyFinalizedException(
                f"Booking {latest.booking_number} was finalized concurrently"
            )
        if latest.status.is_terminal:
            return AlreadyTerminalException(
                f"Booking {latest.booking_number} is already {latest.status.value}"
            )
        return ConflictException(
            f"Booking {latest.booking_number} was updated concurrently"
        )

    def _get(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundException(f"Booking not found: {booking_id}")
        return booking
