from decimal import Decimal

from flight_booking.inventory.domain import (
    Flight,
    FlightId,
    FlightNumber,
    FlightStatus,
    HoldId,
    Route,
    Seat,
    SeatClass,
    SeatId,
    SeatStatus,
)
from flight_booking.shared.domain import Currency, IsoDateTime, Money


def flight_to_item(flight: Flight) -> dict:
    """Flight をストレージのアイテム形式に変換する"""
    return {
        "entity_type": "FLIGHT",
        "flight_id": str(flight.id),
        "flight_number": str(flight.flight_number),
        "origin": str(flight.route.origin),
        "destination": str(flight.route.destination),
        "departure_time": str(flight.departure_time),
        "arrival_time": str(flight.arrival_time),
        "total_seats": flight.total_seats,
        "available_seats": flight.available_seats,
        "status": flight.status.value,
    }


def item_to_flight(item: dict) -> Flight:
    """アイテムを Flight エンティティに変換する"""
    return Flight(
        id=FlightId(value=item["flight_id"]),
        flight_number=FlightNumber(value=item["flight_number"]),
        route=Route.of(item["origin"], item["destination"]),
        departure_time=IsoDateTime.from_string(item["departure_time"]),
        arrival_time=IsoDateTime.from_string(item["arrival_time"]),
        total_seats=int(item["total_seats"]),
        available_seats=int(item["available_seats"]),
        status=FlightStatus(item["status"]),
    )


def seat_to_item(seat: Seat) -> dict:
    """Seat をストレージのアイテム形式に変換する"""
    item = {
        "entity_type": "SEAT",
        "flight_id": str(seat.flight_id),
        "seat_id": str(seat.id),
        "seat_class": seat.seat_class.value,
        "price_amount": str(seat.price.amount),
        "price_currency": str(seat.price.currency),
        "status": seat.status.value,
    }
    if seat.held_by is not None:
        item["held_by"] = str(seat.held_by)
    return item


def item_to_seat(item: dict) -> Seat:
    """アイテムを Seat エンティティに変換する"""
    return Seat(
        id=SeatId(value=item["seat_id"]),
        flight_id=FlightId(value=item["flight_id"]),
        seat_class=SeatClass(item["seat_class"]),
        price=Money(
            amount=Decimal(item["price_amount"]),
            currency=Currency(item["price_currency"]),
        ),
        status=SeatStatus(item["status"]),
        held_by=HoldId(value=item["held_by"]) if item.get("held_by") else None,
    )
