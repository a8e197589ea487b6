from unittest.mock import MagicMock

import pytest

from flight_booking.booking.applications.cancel_booking import CancelBookingService
from flight_booking.booking.domain import (
    AlreadyFinalizedException,
    AlreadyTerminalException,
    BookingId,
    BookingNotFoundException,
    BookingStatus,
    CancellationReason,
)
from flight_booking.inventory.applications.release_seats import ReleaseSeatsService
from flight_booking.inventory.applications.reserve_seats import ReserveSeatsService
from flight_booking.inventory.domain import FlightId, SeatClass
from flight_booking.shared.domain import (
    ConflictException,
    OptimisticLockException,
    PaymentStatus,
)

BOOKING_ID = BookingId("booking-1")


@pytest.fixture
def held_booking(flight_repository, booking_repository, create_booking):
    """座席 01A/01B を確保済みの PENDING 予約"""
    hold = ReserveSeatsService(flight_repository).reserve(
        FlightId("FL-001"), SeatClass.ECONOMY, 2
    )
    booking = create_booking(hold_id=str(hold.hold_id))
    booking_repository.save(booking)
    return booking


@pytest.fixture
def service(flight_repository, booking_repository):
    return CancelBookingService(booking_repository, ReleaseSeatsService(flight_repository))


class TestCancelBookingService:
    """CancelBookingService のテスト"""

    def test_cancel_releases_seats(
        self, service, held_booking, booking_repository, flight_repository
    ):
        # Act
        booking = service.cancel(BOOKING_ID)

        # Assert
        stored = booking_repository.find_by_id(BOOKING_ID)
        assert booking.status is BookingStatus.CANCELLED
        assert stored.cancellation_reason is CancellationReason.USER_REQUEST
        assert stored.seats == ()
        assert flight_repository.find_by_id(FlightId("FL-001")).available_seats == 4

    def test_payment_failure_marks_payment_failed(
        self, service, held_booking, booking_repository
    ):
        service.cancel(BOOKING_ID, CancellationReason.PAYMENT_FAILED)

        stored = booking_repository.find_by_id(BOOKING_ID)
        assert stored.status is BookingStatus.CANCELLED
        assert stored.payment_status is PaymentStatus.FAILED

    def test_user_can_cancel_confirmed_booking(
        self, service, flight_repository, booking_repository, create_booking
    ):
        hold = ReserveSeatsService(flight_repository).reserve(
            FlightId("FL-001"), SeatClass.ECONOMY, 2
        )
        booking_repository.save(
            create_booking(
                status=BookingStatus.CONFIRMED,
                payment_status=PaymentStatus.PAID,
                hold_id=str(hold.hold_id),
            )
        )

        booking = service.cancel(BOOKING_ID)

        assert booking.status is BookingStatus.CANCELLED
        assert booking.payment_status is PaymentStatus.PAID

    @pytest.mark.parametrize(
        "reason",
        [CancellationReason.HOLD_EXPIRED, CancellationReason.PAYMENT_FAILED],
    )
    def test_finalizing_reason_on_confirmed_booking_raises(
        self, service, booking_repository, create_booking, reason
    ):
        """確定済みの予約は期限切れ・決済失敗で取り消されない"""
        booking_repository.save(
            create_booking(status=BookingStatus.CONFIRMED, payment_status=PaymentStatus.PAID)
        )

        with pytest.raises(AlreadyFinalizedException):
            service.cancel(BOOKING_ID, reason)

        assert booking_repository.find_by_id(BOOKING_ID).status is BookingStatus.CONFIRMED

    def test_cancel_twice_raises_already_terminal(self, service, held_booking):
        service.cancel(BOOKING_ID)

        with pytest.raises(AlreadyTerminalException):
            service.cancel(BOOKING_ID)

    def test_unknown_booking_raises(self, service):
        with pytest.raises(BookingNotFoundException):
            service.cancel(BookingId("missing"))

    def test_lost_race_to_confirmation_raises_already_finalized(
        self, mock_repository, create_booking
    ):
        """条件付き更新に失敗し、最新状態が確定済みなら AlreadyFinalizedException"""
        mock_repository.find_by_id.side_effect = [
            create_booking(),
            create_booking(status=BookingStatus.CONFIRMED, payment_status=PaymentStatus.PAID),
        ]
        mock_repository.update.side_effect = OptimisticLockException("conflict")
        release_service = MagicMock()
        service = CancelBookingService(mock_repository, release_service)

        with pytest.raises(AlreadyFinalizedException):
            service.cancel(BOOKING_ID, CancellationReason.HOLD_EXPIRED)

        release_service.release.assert_not_called()

    def test_lost_race_on_user_cancel_raises_conflict(self, mock_repository, create_booking):
        mock_repository.find_by_id.side_effect = [
            create_booking(),
            create_booking(status=BookingStatus.CONFIRMED, payment_status=PaymentStatus.PAID),
        ]
        mock_repository.update.side_effect = OptimisticLockException("conflict")
        service = CancelBookingService(mock_repository, MagicMock())

        with pytest.raises(ConflictException):
            service.cancel(BOOKING_ID)

    def test_release_held_seats_is_repeatable(
        self, service, held_booking, booking_repository, flight_repository
    ):
        """座席返却の途中で止まった予約は再実行で解放を完了できる"""
        booking = booking_repository.find_by_id(BOOKING_ID)
        booking.cancel()
        booking_repository.update(
            booking,
            expected_status=BookingStatus.PENDING,
            expected_payment_status=PaymentStatus.PENDING,
        )

        first = service.release_held_seats(booking_repository.find_by_id(BOOKING_ID))
        second = service.release_held_seats(booking_repository.find_by_id(BOOKING_ID))

        assert len(first) == 2
        assert second == []
        assert flight_repository.find_by_id(FlightId("FL-001")).available_seats == 4

    def test_stale_sweep_keeps_seats_reserved_by_next_booking(
        self, service, held_booking, booking_repository, flight_repository
    ):
        """キャンセル前の予約スナップショットで再解放しても、同じ座席の後続予約は残る"""
        # Arrange
        stale = booking_repository.find_by_id(BOOKING_ID)
        service.cancel(BOOKING_ID)
        next_hold = ReserveSeatsService(flight_repository).reserve(
            FlightId("FL-001"), SeatClass.ECONOMY, 2
        )

        # Act
        released = service.release_held_seats(stale)

        # Assert
        seats = flight_repository.find_seats(FlightId("FL-001"), SeatClass.ECONOMY)
        assert released == []
        assert next_hold.seat_ids == stale.seat_ids
        assert [seat.is_held_by(next_hold.hold_id) for seat in seats] == [True, True, False]
        assert flight_repository.find_by_id(FlightId("FL-001")).available_seats == 2
