import threading
from typing import Sequence

from flight_booking.inventory.domain import (
    Flight,
    FlightId,
    FlightRepository,
    FlightStatus,
    HoldId,
    Route,
    Seat,
    SeatClass,
    SeatId,
    SeatStatus,
)
from flight_booking.inventory.infrastructure.flight_item_mapper import (
    flight_to_item,
    item_to_flight,
    item_to_seat,
    seat_to_item,
)
from flight_booking.shared.domain import IsoDateTime
from flight_booking.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    OptimisticLockException,
)


class InMemoryFlightRepository(FlightRepository):
    """メモリ上の FlightRepository 実装（ローカル実行・テスト用）

    アイテムは辞書で保持し、読み出しのたびに新しいエンティティを生成する。
    コミットは1つのロックの中で条件確認と更新をまとめて行う。
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._flights: dict[FlightId, dict] = {}
        self._seats: dict[FlightId, dict[SeatId, dict]] = {}

    def save(self, flight: Flight) -> None:
        with self._lock:
            if flight.id in self._flights:
                raise DuplicateResourceException(f"Flight already exists: {flight.id}")
            self._flights[flight.id] = flight_to_item(flight)
            self._seats.setdefault(flight.id, {})

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        with self._lock:
            item = self._flights.get(flight_id)
            return item_to_flight(item) if item else None

    def save_seats(self, seats: Sequence[Seat]) -> None:
        with self._lock:
            for seat in seats:
                flight_seats = self._seats.setdefault(seat.flight_id, {})
                if seat.id in flight_seats:
                    raise DuplicateResourceException(
                        f"Seat already exists: {seat.flight_id}/{seat.id}"
                    )
                flight_seats[seat.id] = seat_to_item(seat)

    def find_seats(
        self, flight_id: FlightId, seat_class: SeatClass | None = None
    ) -> list[Seat]:
        with self._lock:
            items = list(self._seats.get(flight_id, {}).values())
        seats = [item_to_seat(item) for item in items]
        if seat_class is not None:
            seats = [seat for seat in seats if seat.seat_class == seat_class]
        return sorted(seats, key=lambda seat: seat.id)

    def search_by_route(
        self, route: Route, departure_from: IsoDateTime, departure_to: IsoDateTime
    ) -> list[Flight]:
        with self._lock:
            items = list(self._flights.values())
        flights = [
            flight
            for flight in map(item_to_flight, items)
            if flight.route == route and flight.departs_within(departure_from, departure_to)
        ]
        return sorted(flights, key=lambda flight: flight.departure_time)

    def find_by_status(self, status: FlightStatus) -> list[Flight]:
        with self._lock:
            items = [item for item in self._flights.values() if item["status"] == status.value]
        return sorted(map(item_to_flight, items), key=lambda flight: flight.departure_time)

    def commit_seat_allocation(self, flight: Flight, seats: Sequence[Seat]) -> None:
        count = len(seats)
        with self._lock:
            flight_item = self._require_flight(flight.id)
            seat_items = self._require_seats(flight.id, seats)
            if (
                flight_item["status"] != FlightStatus.SCHEDULED.value
                or flight_item["available_seats"] < count
                or any(item["status"] != SeatStatus.AVAILABLE.value for item in seat_items)
            ):
                raise OptimisticLockException(
                    f"Seat allocation condition failed: flight_id={flight.id}"
                )

            flight_item["available_seats"] -= count
            for seat, item in zip(seats, seat_items):
                item["status"] = SeatStatus.OCCUPIED.value
                item["held_by"] = str(seat.held_by)

    def commit_seat_release(
        self, flight: Flight, seats: Sequence[Seat], hold_id: HoldId
    ) -> None:
        count = len(seats)
        with self._lock:
            flight_item = self._require_flight(flight.id)
            seat_items = self._require_seats(flight.id, seats)
            if flight_item["available_seats"] + count > flight_item["total_seats"] or any(
                item["status"] != SeatStatus.OCCUPIED.value
                or item.get("held_by") != str(hold_id)
                for item in seat_items
            ):
                raise OptimisticLockException(
                    f"Seat release condition failed: flight_id={flight.id}"
                )

            flight_item["available_seats"] += count
            for item in seat_items:
                item["status"] = SeatStatus.AVAILABLE.value
                item.pop("held_by", None)

    def update_status(self, flight: Flight, expected_status: FlightStatus) -> None:
        with self._lock:
            flight_item = self._require_flight(flight.id)
            if flight_item["status"] != expected_status.value:
                raise OptimisticLockException(
                    f"Flight status conflict: expected {expected_status}, "
                    f"flight_id={flight.id}"
                )
            flight_item["status"] = flight.status.value

    def update_seat(self, seat: Seat, expected_status: SeatStatus) -> None:
        with self._lock:
            (seat_item,) = self._require_seats(seat.flight_id, [seat])
            if seat_item["status"] != expected_status.value:
                raise OptimisticLockException(
                    f"Seat status conflict: expected {expected_status}, "
                    f"seat={seat.flight_id}/{seat.id}"
                )
            seat_item["status"] = seat.status.value

    def _require_flight(self, flight_id: FlightId) -> dict:
        item = self._flights.get(flight_id)
        if item is None:
            raise OptimisticLockException(f"Flight disappeared: {flight_id}")
        return item

    def _require_seats(self, flight_id: FlightId, seats: Sequence[Seat]) -> list[dict]:
        flight_seats = self._seats.get(flight_id, {})
        items = [flight_seats.get(seat.id) for seat in seats]
        if any(item is None for item in items):
            raise OptimisticLockException(f"Seat disappeared on flight {flight_id}")
        return items
