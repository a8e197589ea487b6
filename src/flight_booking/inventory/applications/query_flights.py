from flight_booking.inventory.domain import (
    Flight,
    FlightId,
    FlightNotFoundException,
    FlightRepository,
    FlightStatus,
    Route,
    Seat,
    SeatClass,
)
from flight_booking.shared.domain import IsoDateTime, ValidationException


class FlightQueryService:
    """フライト検索（読み取り専用）"""

    def __init__(self, repository: FlightRepository) -> None:
        self._repository = repository

    def search_available(
        self, route: Route, departure_from: IsoDateTime, departure_to: IsoDateTime
    ) -> list[Flight]:
        """予約可能なフライトを出発時刻順に返す"""
        if departure_to.is_before(departure_from):
            raise ValidationException("Departure window end must not precede start")

        flights = self._repository.search_by_route(route, departure_from, departure_to)
        return [
            flight
            for flight in flights
            if flight.status.is_bookable and flight.available_seats > 0
        ]

    def get_flight(self, flight_id: FlightId) -> Flight:
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise FlightNotFoundException(f"Flight not found: {flight_id}")
        return flight

    def list_seats(
        self, flight_id: FlightId, seat_class: SeatClass | None = None
    ) -> list[Seat]:
        """座席表を座席番号順に返す"""
        self.get_flight(flight_id)
        return self._repository.find_seats(flight_id, seat_class)

    def find_overdue(self, now: IsoDateTime) -> list[Flight]:
        """出発時刻を過ぎても SCHEDULED のままのフライト"""
        return [
            flight
            for flight in self._repository.find_by_status(FlightStatus.SCHEDULED)
            if flight.departure_time.is_before(now)
        ]
