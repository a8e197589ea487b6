from typing import Iterable

from flight_booking.inventory.domain.entity.seat import Seat
from flight_booking.inventory.domain.enum import FlightStatus, SeatClass
from flight_booking.inventory.domain.exception import InvalidFlightStateException
from flight_booking.inventory.domain.value_object import (
    FlightId,
    FlightNumber,
    HoldId,
    Route,
)
from flight_booking.shared.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    InsufficientCapacityException,
    IsoDateTime,
    ValidationException,
)


class Flight(AggregateRoot[FlightId]):
    """フライト（座席在庫の集約ルート）

    不変条件: 0 <= available_seats <= total_seats
    available_seats は座席の確保・解放を通してのみ変化する。
    """

    def __init__(
        self,
        id: FlightId,
        flight_number: FlightNumber,
        route: Route,
        departure_time: IsoDateTime,
        arrival_time: IsoDateTime,
        total_seats: int,
        available_seats: int | None = None,
        status: FlightStatus = FlightStatus.SCHEDULED,
    ) -> None:
        super().__init__(id)

        self._flight_number = flight_number
        self._route = route
        self._departure_time = departure_time
        self._arrival_time = arrival_time
        self._total_seats = total_seats
        self._available_seats = (
            total_seats if available_seats is None else available_seats
        )
        self._status = status

        self._validate_schedule()
        self._validate_capacity()

    def _validate_schedule(self) -> None:
        """出発時刻 < 到着時刻"""
        if not self._departure_time.is_before(self._arrival_time):
            raise ValidationException("Departure time must be before arrival time")

    def _validate_capacity(self) -> None:
        if self._total_seats <= 0:
            raise ValidationException("Total seats must be positive")
        if not 0 <= self._available_seats <= self._total_seats:
            raise BusinessRuleViolationException(
                f"Available seats out of range: {self._available_seats}"
                f" (total {self._total_seats})"
            )

    @property
    def flight_number(self) -> FlightNumber:
        return self._flight_number

    @property
    def route(self) -> Route:
        return self._route

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def arrival_time(self) -> IsoDateTime:
        return self._arrival_time

    @property
    def total_seats(self) -> int:
        return self._total_seats

    @property
    def available_seats(self) -> int:
        return self._available_seats

    @property
    def occupied_seats(self) -> int:
        return self._total_seats - self._available_seats

    @property
    def status(self) -> FlightStatus:
        return self._status

    def departs_within(self, start: IsoDateTime, end: IsoDateTime) -> bool:
        """出発時刻が [start, end] の範囲内かどうか"""
        return not (
            self._departure_time.is_before(start) or self._departure_time.is_after(end)
        )

    def allocate_seats(
        self,
        seats: Iterable[Seat],
        seat_class: SeatClass,
        count: int,
        hold_id: HoldId,
    ) -> list[Seat]:
        """指定クラスの空席を若い座席番号から count 席確保する

        確保した座席は hold_id 付きで OCCUPIED になり、空席数が count 減る。
        永続化はリポジトリの条件付き書き込みで行う。
        """
        if count <= 0:
            raise ValidationException(f"Seat count must be positive: {count}")
        if not self._status.is_bookable:
            raise InvalidFlightStateException(
                f"Flight {self.id} is not bookable (status={self._status.value})"
            )

        candidates = sorted(
            (
                seat
                for seat in seats
                if seat.flight_id == self.id
                and seat.seat_class == seat_class
                and seat.is_available
            ),
            key=lambda seat: seat.id,
        )
        if len(candidates) < count or self._available_seats < count:
            raise InsufficientCapacityException(
                f"Flight {self.id} has {len(candidates)} {seat_class.value} seats"
                f" available, {count} requested"
            )

        selected = candidates[:count]
        for seat in selected:
            seat.occupy(hold_id)
        self._available_seats -= count
        return selected

    def release_seats(self, seats: Iterable[Seat], hold_id: HoldId) -> list[Seat]:
        """hold_id で確保された座席を解放する

        AVAILABLE の座席や別の確保に移った座席は何もしない（冪等）。
        実際に解放した座席のみを返す。
        """
        released = [seat for seat in seats if seat.is_held_by(hold_id)]
        if self._available_seats + len(released) > self._total_seats:
            raise BusinessRuleViolationException(
                f"Releasing {len(released)} seats would exceed capacity of {self.id}"
            )
        for seat in released:
            seat.release()
        self._available_seats += len(released)
        return released

    def change_status(self, target: FlightStatus) -> None:
        """フライトのステータスを遷移させる"""
        self._status.ensure_can_transition_to(target)
        self._status = target
