from decimal import Decimal

import pytest

from flight_booking.inventory.applications.reserve_seats import ReserveSeatsService
from flight_booking.inventory.domain import (
    FlightId,
    FlightNotFoundException,
    FlightStatus,
    InvalidFlightStateException,
    SeatClass,
    SeatId,
    SeatStatus,
)
from flight_booking.inventory.infrastructure.in_memory_flight_repository import (
    InMemoryFlightRepository,
)
from flight_booking.shared.domain import (
    ConflictException,
    InsufficientCapacityException,
    Money,
    OptimisticLockException,
)


class TestReserveSeatsService:
    """ReserveSeatsService のテスト"""

    def test_reserve_commits_lowest_seats(self, mock_repository, create_flight, create_seat):
        """空席を確保し、リポジトリの条件付きコミットに渡す"""
        # Arrange
        mock_repository.find_by_id.return_value = create_flight()
        mock_repository.find_seats.return_value = [
            create_seat("01B"),
            create_seat("01A"),
            create_seat("01C"),
        ]
        service = ReserveSeatsService(repository=mock_repository)

        # Act
        hold = service.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 2)

        # Assert
        assert hold.seat_ids == (SeatId("01A"), SeatId("01B"))
        assert hold.total_price == Money.jpy(Decimal("20000"))
        mock_repository.commit_seat_allocation.assert_called_once()
        flight, seats = mock_repository.commit_seat_allocation.call_args[0]
        assert flight.available_seats == 2
        assert [seat.id for seat in seats] == [SeatId("01A"), SeatId("01B")]
        assert all(seat.is_held_by(hold.hold_id) for seat in seats)

    def test_unknown_flight_raises(self, mock_repository):
        mock_repository.find_by_id.return_value = None
        service = ReserveSeatsService(repository=mock_repository)

        with pytest.raises(FlightNotFoundException):
            service.reserve(FlightId("missing"), SeatClass.ECONOMY, 1)

    def test_insufficient_capacity_does_not_commit(
        self, mock_repository, create_flight, create_seat
    ):
        mock_repository.find_by_id.return_value = create_flight()
        mock_repository.find_seats.return_value = [create_seat("01A")]
        service = ReserveSeatsService(repository=mock_repository)

        with pytest.raises(InsufficientCapacityException):
            service.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 2)

        mock_repository.commit_seat_allocation.assert_not_called()

    def test_commit_conflict_reselects_from_fresh_state(
        self, mock_repository, create_flight, create_seat
    ):
        """コミットが競合したら最新の在庫から選び直して再試行する"""
        # Arrange
        mock_repository.find_by_id.side_effect = [
            create_flight(),
            create_flight(available_seats=3),
        ]
        mock_repository.find_seats.side_effect = [
            [create_seat("01A"), create_seat("01B")],
            [
                create_seat("01A", status=SeatStatus.OCCUPIED, held_by="other"),
                create_seat("01B"),
            ],
        ]
        mock_repository.commit_seat_allocation.side_effect = [
            OptimisticLockException("conflict"),
            None,
        ]
        service = ReserveSeatsService(repository=mock_repository)

        # Act
        hold = service.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 1)

        # Assert
        assert hold.seat_ids == (SeatId("01B"),)
        assert mock_repository.commit_seat_allocation.call_count == 2

    def test_conflict_on_every_attempt_raises_conflict(
        self, mock_repository, create_flight, create_seat
    ):
        """再試行を使い切った場合は ConflictException"""
        mock_repository.find_by_id.side_effect = lambda _: create_flight()
        mock_repository.find_seats.side_effect = lambda *_: [
            create_seat("01A"),
            create_seat("01B"),
        ]
        mock_repository.commit_seat_allocation.side_effect = OptimisticLockException(
            "conflict"
        )
        service = ReserveSeatsService(repository=mock_repository, max_attempts=3)

        with pytest.raises(ConflictException) as exc_info:
            service.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 1)

        assert not isinstance(exc_info.value, OptimisticLockException)
        assert mock_repository.commit_seat_allocation.call_count == 3

    def test_commit_conflict_after_seats_taken_raises_insufficient_capacity(
        self, mock_repository, create_flight, create_seat
    ):
        """コミット時に競合し、最新状態で容量不足なら InsufficientCapacityException"""
        mock_repository.find_by_id.side_effect = [
            create_flight(),
            create_flight(available_seats=0),
        ]
        mock_repository.find_seats.side_effect = [
            [create_seat("01A")],
            [],
        ]
        mock_repository.commit_seat_allocation.side_effect = OptimisticLockException(
            "conflict"
        )
        service = ReserveSeatsService(repository=mock_repository)

        with pytest.raises(InsufficientCapacityException):
            service.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 1)

    def test_commit_conflict_after_flight_cancelled_raises_invalid_state(
        self, mock_repository, create_flight, create_seat
    ):
        mock_repository.find_by_id.side_effect = [
            create_flight(),
            create_flight(status=FlightStatus.CANCELLED),
        ]
        mock_repository.find_seats.side_effect = lambda *_: [create_seat("01A")]
        mock_repository.commit_seat_allocation.side_effect = OptimisticLockException(
            "conflict"
        )
        service = ReserveSeatsService(repository=mock_repository)

        with pytest.raises(InvalidFlightStateException):
            service.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 1)

    def test_reserve_against_in_memory_repository(self, flight_repository):
        """メモリ上のリポジトリで空席数と座席ステータスが揃って変わる"""
        service = ReserveSeatsService(repository=flight_repository)

        hold = service.reserve(FlightId("FL-001"), SeatClass.BUSINESS, 1)

        flight = flight_repository.find_by_id(FlightId("FL-001"))
        seats = flight_repository.find_seats(FlightId("FL-001"), SeatClass.BUSINESS)
        assert hold.seat_ids == (SeatId("02A"),)
        assert flight.available_seats == 3
        assert seats[0].is_occupied

    def test_request_interleaved_with_another_commit_gets_next_seat(self, flight_repository):
        """座席の読み出しとコミットの間に別の確保が入っても、空席があれば確保できる"""
        # Arrange
        other = ReserveSeatsService(repository=flight_repository)
        service = ReserveSeatsService(repository=InterleavingFlightRepository(
            flight_repository,
            lambda: other.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 1),
        ))

        # Act
        hold = service.reserve(FlightId("FL-001"), SeatClass.ECONOMY, 1)

        # Assert
        seats = flight_repository.find_seats(FlightId("FL-001"), SeatClass.ECONOMY)
        assert hold.seat_ids == (SeatId("01B"),)
        assert [seat.is_occupied for seat in seats] == [True, True, False]
        assert flight_repository.find_by_id(FlightId("FL-001")).available_seats == 2


class InterleavingFlightRepository(InMemoryFlightRepository):
    """最初の座席読み出しの直後に割り込み処理を1回だけ実行するリポジトリ"""

    def __init__(self, inner: InMemoryFlightRepository, interleave) -> None:
        self._inner = inner
        self._interleave = interleave

    def find_by_id(self, flight_id):
        return self._inner.find_by_id(flight_id)

    def find_seats(self, flight_id, seat_class=None):
        seats = self._inner.find_seats(flight_id, seat_class)
        if self._interleave is not None:
            interleave, self._interleave = self._interleave, None
            interleave()
        return seats

    def commit_seat_allocation(self, flight, seats):
        self._inner.commit_seat_allocation(flight, seats)
