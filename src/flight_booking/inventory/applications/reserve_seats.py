from aws_lambda_powertools import Logger

from flight_booking.inventory.domain import (
    Flight,
    FlightId,
    FlightNotFoundException,
    FlightRepository,
    HoldId,
    SeatClass,
    SeatHold,
)
from flight_booking.shared.domain import (
    ConflictException,
    Money,
    OptimisticLockException,
)

logger = Logger(child=True)

DEFAULT_MAX_ATTEMPTS = 5


class ReserveSeatsService:
    """座席確保ユースケース

    空席の確認と確保は Flight 集約で行い、リポジトリの条件付きコミットで
    他の確保・解放と原子的に反映する。コミット時に条件が崩れていた場合は
    最新状態から座席を選び直して再試行する。
    容量が足りなくなった時点で InsufficientCapacityException、
    再試行を使い切った場合は ConflictException。
    """

    def __init__(
        self, repository: FlightRepository, max_attempts: int = DEFAULT_MAX_ATTEMPTS
    ) -> None:
        self._repository = repository
        self._max_attempts = max_attempts

    def reserve(self, flight_id: FlightId, seat_class: SeatClass, count: int) -> SeatHold:
        """座席を確保する"""
        hold_id = HoldId.generate()
        last_error: OptimisticLockException | None = None

        for attempt in range(1, self._max_attempts + 1):
            flight = self._get_flight(flight_id)
            seats = self._repository.find_seats(flight_id, seat_class)
            selected = flight.allocate_seats(seats, seat_class, count, hold_id)

            try:
                self._repository.commit_seat_allocation(flight, selected)
            except OptimisticLockException as e:
                logger.info(
                    "Seat allocation conflicted, retrying",
                    extra={"flight_id": str(flight_id), "attempt": attempt},
                )
                last_error = e
                continue

            return SeatHold(
                hold_id=hold_id,
                flight_id=flight_id,
                seat_ids=tuple(seat.id for seat in selected),
                total_price=Money.total(seat.price for seat in selected),
            )

        raise ConflictException(
            f"Seat allocation on flight {flight_id} kept conflicting"
            f" after {self._max_attempts} attempts"
        ) from last_error

    def _get_flight(self, flight_id: FlightId) -> Flight:
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise FlightNotFoundException(f"Flight not found: {flight_id}")
        return flight
