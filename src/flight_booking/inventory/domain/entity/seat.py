from flight_booking.inventory.domain.enum import SeatClass, SeatStatus
from flight_booking.inventory.domain.value_object import FlightId, HoldId, SeatId
from flight_booking.shared.domain import Entity, Money


class Seat(Entity[SeatId]):
    """座席エンティティ（Flight 集約の配下）

    OCCUPIED の座席は確保した HoldId を持ち、解放は同じ HoldId でのみ行える。
    """

    def __init__(
        self,
        id: SeatId,
        flight_id: FlightId,
        seat_class: SeatClass,
        price: Money,
        status: SeatStatus = SeatStatus.AVAILABLE,
        held_by: HoldId | None = None,
    ) -> None:
        super().__init__(id)
        self._flight_id = flight_id
        self._seat_class = seat_class
        self._price = price
        self._status = status
        self._held_by = held_by

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seat):
            return False
        return self._flight_id == other._flight_id and self.id == other.id

    def __hash__(self) -> int:
        return hash((self._flight_id, self.id))

    def __repr__(self) -> str:
        return f"Seat({self._flight_id}/{self.id}, {self._status.value})"

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_class(self) -> SeatClass:
        return self._seat_class

    @property
    def price(self) -> Money:
        return self._price

    @property
    def status(self) -> SeatStatus:
        return self._status

    @property
    def held_by(self) -> HoldId | None:
        return self._held_by

    @property
    def is_available(self) -> bool:
        return self._status is SeatStatus.AVAILABLE

    @property
    def is_occupied(self) -> bool:
        return self._status is SeatStatus.OCCUPIED

    def is_held_by(self, hold_id: HoldId) -> bool:
        return self.is_occupied and self._held_by == hold_id

    def occupy(self, hold_id: HoldId) -> None:
        """座席を確保する"""
        self._transition_to(SeatStatus.OCCUPIED)
        self._held_by = hold_id

    def release(self) -> None:
        """座席を解放する"""
        self._transition_to(SeatStatus.AVAILABLE)
        self._held_by = None

    def withdraw(self) -> None:
        """整備のため販売対象から外す"""
        self._transition_to(SeatStatus.MAINTENANCE)

    def _transition_to(self, target: SeatStatus) -> None:
        self._status.ensure_can_transition_to(target)
        self._status = target
