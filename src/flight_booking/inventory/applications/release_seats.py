from typing import Iterable

from flight_booking.inventory.domain import (
    Flight,
    FlightId,
    FlightNotFoundException,
    FlightRepository,
    HoldId,
    Seat,
    SeatId,
    SeatNotFoundException,
)
from flight_booking.shared.domain import ConflictException, OptimisticLockException


class ReleaseSeatsService:
    """座席解放ユースケース（補償トランザクション用）

    解放するのは hold_id で確保された座席だけで、すでに AVAILABLE の座席や
    別の確保に移った座席は何もしない。同じ座席集合で何度呼んでも
    状態の変化は一度だけになる。
    """

    def __init__(self, repository: FlightRepository) -> None:
        self._repository = repository

    def release(
        self, flight_id: FlightId, seat_ids: Iterable[SeatId], hold_id: HoldId
    ) -> list[SeatId]:
        """座席を解放し、実際に解放した座席番号を返す"""
        requested = set(seat_ids)
        flight, seats = self._load(flight_id, requested)
        released = flight.release_seats(seats, hold_id)
        if not released:
            return []

        try:
            self._repository.commit_seat_release(flight, released, hold_id)
        except OptimisticLockException as e:
            # 並行した解放で既に戻っていれば冪等に成功とみなす
            flight, seats = self._load(flight_id, requested)
            if not any(seat.is_held_by(hold_id) for seat in seats):
                return []
            raise ConflictException(
                f"Seat release on flight {flight_id} conflicted with another request"
            ) from e

        return sorted(seat.id for seat in released)

    def _load(
        self, flight_id: FlightId, seat_ids: set[SeatId]
    ) -> tuple[Flight, list[Seat]]:
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise FlightNotFoundException(f"Flight not found: {flight_id}")

        seats = [
            seat
            for seat in self._repository.find_seats(flight_id)
            if seat.id in seat_ids
        ]
        missing = seat_ids - {seat.id for seat in seats}
        if missing:
            raise SeatNotFoundException(
                f"Seats not found on flight {flight_id}: "
                f"{', '.join(sorted(str(seat_id) for seat_id in missing))}"
            )
        return flight, seats
