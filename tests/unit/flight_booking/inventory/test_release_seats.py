import pytest

from flight_booking.inventory.applications.release_seats import ReleaseSeatsService
from flight_booking.inventory.applications.reserve_seats import ReserveSeatsService
from flight_booking.inventory.domain import (
    FlightId,
    FlightNotFoundException,
    HoldId,
    SeatClass,
    SeatId,
    SeatNotFoundException,
    SeatStatus,
)
from flight_booking.shared.domain import ConflictException, OptimisticLockException

FLIGHT_ID = FlightId("FL-001")
HOLD = HoldId("hold-1")


class TestReleaseSeatsService:
    """ReleaseSeatsService のテスト"""

    def test_release_restores_seats_and_counter(self, flight_repository):
        hold = ReserveSeatsService(flight_repository).reserve(
            FLIGHT_ID, SeatClass.ECONOMY, 2
        )
        service = ReleaseSeatsService(flight_repository)

        released = service.release(
            FLIGHT_ID, [SeatId("01B"), SeatId("01A")], hold.hold_id
        )

        flight = flight_repository.find_by_id(FLIGHT_ID)
        assert released == [SeatId("01A"), SeatId("01B")]
        assert flight.available_seats == 4
        assert all(seat.is_available for seat in flight_repository.find_seats(FLIGHT_ID))
        assert all(seat.held_by is None for seat in flight_repository.find_seats(FLIGHT_ID))

    def test_release_twice_changes_state_once(self, flight_repository):
        """同じ座席集合の解放を2回行っても状態の変化は1回分"""
        hold = ReserveSeatsService(flight_repository).reserve(
            FLIGHT_ID, SeatClass.ECONOMY, 2
        )
        service = ReleaseSeatsService(flight_repository)

        first = service.release(FLIGHT_ID, hold.seat_ids, hold.hold_id)
        second = service.release(FLIGHT_ID, hold.seat_ids, hold.hold_id)

        assert len(first) == 2
        assert second == []
        assert flight_repository.find_by_id(FLIGHT_ID).available_seats == 4

    def test_stale_release_keeps_seats_of_later_reservation(self, flight_repository):
        """解放済みの確保で再度解放しても、同じ座席を後から確保した予約には影響しない"""
        # Arrange
        reserve = ReserveSeatsService(flight_repository)
        service = ReleaseSeatsService(flight_repository)
        first = reserve.reserve(FLIGHT_ID, SeatClass.ECONOMY, 2)
        service.release(FLIGHT_ID, first.seat_ids, first.hold_id)
        second = reserve.reserve(FLIGHT_ID, SeatClass.ECONOMY, 2)
        assert second.seat_ids == first.seat_ids

        # Act
        released = service.release(FLIGHT_ID, first.seat_ids, first.hold_id)

        # Assert
        seats = flight_repository.find_seats(FLIGHT_ID, SeatClass.ECONOMY)
        assert released == []
        assert [seat.is_held_by(second.hold_id) for seat in seats] == [True, True, False]
        assert flight_repository.find_by_id(FLIGHT_ID).available_seats == 2

    def test_unknown_seat_raises(self, flight_repository):
        service = ReleaseSeatsService(flight_repository)

        with pytest.raises(SeatNotFoundException):
            service.release(FLIGHT_ID, [SeatId("99Z")], HOLD)

    def test_unknown_flight_raises(self, flight_repository):
        service = ReleaseSeatsService(flight_repository)

        with pytest.raises(FlightNotFoundException):
            service.release(FlightId("missing"), [SeatId("01A")], HOLD)

    def test_conflict_resolved_by_concurrent_release_is_noop(
        self, mock_repository, create_flight, create_seat
    ):
        """コミットが競合しても、座席が既に戻っていれば成功（解放なし）とする"""
        mock_repository.find_by_id.side_effect = [
            create_flight(available_seats=3),
            create_flight(available_seats=4),
        ]
        mock_repository.find_seats.side_effect = [
            [create_seat("01A", status=SeatStatus.OCCUPIED, held_by="hold-1")],
            [create_seat("01A")],
        ]
        mock_repository.commit_seat_release.side_effect = OptimisticLockException("x")
        service = ReleaseSeatsService(mock_repository)

        assert service.release(FLIGHT_ID, [SeatId("01A")], HOLD) == []

    def test_conflict_after_seat_moved_to_another_hold_is_noop(
        self, mock_repository, create_flight, create_seat
    ):
        mock_repository.find_by_id.side_effect = lambda _: create_flight(available_seats=3)
        mock_repository.find_seats.side_effect = [
            [create_seat("01A", status=SeatStatus.OCCUPIED, held_by="hold-1")],
            [create_seat("01A", status=SeatStatus.OCCUPIED, held_by="hold-2")],
        ]
        mock_repository.commit_seat_release.side_effect = OptimisticLockException("x")
        service = ReleaseSeatsService(mock_repository)

        assert service.release(FLIGHT_ID, [SeatId("01A")], HOLD) == []

    def test_conflict_with_seats_still_held_raises(
        self, mock_repository, create_flight, create_seat
    ):
        mock_repository.find_by_id.side_effect = lambda _: create_flight(available_seats=3)
        mock_repository.find_seats.side_effect = lambda *_: [
            create_seat("01A", status=SeatStatus.OCCUPIED, held_by="hold-1")
        ]
        mock_repository.commit_seat_release.side_effect = OptimisticLockException("x")
        service = ReleaseSeatsService(mock_repository)

        with pytest.raises(ConflictException):
            service.release(FLIGHT_ID, [SeatId("01A")], HOLD)

    def test_seats_of_another_hold_are_not_committed(
        self, mock_repository, create_flight, create_seat
    ):
        mock_repository.find_by_id.return_value = create_flight(available_seats=3)
        mock_repository.find_seats.return_value = [
            create_seat("01A", status=SeatStatus.OCCUPIED, held_by="hold-2")
        ]
        service = ReleaseSeatsService(mock_repository)

        assert service.release(FLIGHT_ID, [SeatId("01A")], HOLD) == []
        mock_repository.commit_seat_release.assert_not_called()
