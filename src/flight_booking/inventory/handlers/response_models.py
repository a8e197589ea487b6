from pydantic import BaseModel

from flight_booking.inventory.domain import Flight


class FlightData(BaseModel):
    """フライトのレスポンスモデル"""

    flight_id: str
    flight_number: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    total_seats: int
    available_seats: int
    status: str


class SearchFlightsResponse(BaseModel):
    status: str = "success"
    data: list[FlightData]
    count: int


def to_response(flights: list[Flight]) -> dict:
    """Flight の一覧をレスポンス辞書に変換する"""
    data = [
        FlightData(
            flight_id=str(flight.id),
            flight_number=str(flight.flight_number),
            origin=str(flight.route.origin),
            destination=str(flight.route.destination),
            departure_time=str(flight.departure_time),
            arrival_time=str(flight.arrival_time),
            total_seats=flight.total_seats,
            available_seats=flight.available_seats,
            status=flight.status.value,
        )
        for flight in flights
    ]
    return SearchFlightsResponse(data=data, count=len(data)).model_dump()
