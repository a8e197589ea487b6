from flight_booking.inventory.domain import (
    Flight,
    FlightId,
    FlightNotFoundException,
    FlightRepository,
    FlightStatus,
    Seat,
    SeatId,
    SeatNotFoundException,
)


class ChangeFlightStatusService:
    """フライトのステータス変更ユースケース"""

    def __init__(self, repository: FlightRepository) -> None:
        self._repository = repository

    def change(self, flight_id: FlightId, target: FlightStatus) -> Flight:
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise FlightNotFoundException(f"Flight not found: {flight_id}")
        expected_status = flight.status
        flight.change_status(target)
        self._repository.update_status(flight, expected_status=expected_status)
        return flight


class WithdrawSeatService:
    """座席を整備中にして販売対象から外すユースケース

    空席数は変えない（OCCUPIED 数 = 総座席数 - 空席数 を保つ）。
    """

    def __init__(self, repository: FlightRepository) -> None:
        self._repository = repository

    def withdraw(self, flight_id: FlightId, seat_id: SeatId) -> Seat:
        seat = next(
            (s for s in self._repository.find_seats(flight_id) if s.id == seat_id),
            None,
        )
        if seat is None:
            raise SeatNotFoundException(
                f"Seat not found on flight {flight_id}: {seat_id}"
            )
        expected_status = seat.status
        seat.withdraw()
        self._repository.update_seat(seat, expected_status=expected_status)
        return seat
