from decimal import Decimal
from typing import Iterable

from flight_booking.booking.domain import (
    Booking,
    BookingId,
    BookingNumber,
    BookingSeat,
    BookingStatus,
    CancellationReason,
    UserId,
)
from flight_booking.inventory.domain import FlightId, HoldId, SeatId
from flight_booking.shared.domain import Currency, IsoDateTime, Money, PaymentStatus


def booking_to_item(booking: Booking) -> dict:
    """Booking（座席の関連を除く）をストレージのアイテム形式に変換する"""
    item = {
        "entity_type": "BOOKING",
        "booking_id": str(booking.id),
        "booking_number": str(booking.booking_number),
        "user_id": str(booking.user_id),
        "flight_id": str(booking.flight_id),
        "passenger_count": booking.passenger_count,
        "total_amount": str(booking.total_price.amount),
        "currency": str(booking.total_price.currency),
        "hold_id": str(booking.hold_id),
        "created_at": str(booking.created_at),
        "hold_expires_at": str(booking.hold_expires_at),
        "status": booking.status.value,
        "payment_status": booking.payment_status.value,
    }
    if booking.cancellation_reason is not None:
        item["cancellation_reason"] = booking.cancellation_reason.value
    return item


def booking_seat_to_item(seat: BookingSeat) -> dict:
    return {
        "entity_type": "BOOKING_SEAT",
        "booking_id": str(seat.booking_id),
        "flight_id": str(seat.flight_id),
        "seat_id": str(seat.seat_id),
    }


def item_to_booking(item: dict, seat_items: Iterable[dict]) -> Booking:
    """予約アイテムと座席の関連アイテムから Booking を復元する"""
    reason = item.get("cancellation_reason")
    return Booking(
        id=BookingId(value=item["booking_id"]),
        booking_number=BookingNumber(value=item["booking_number"]),
        user_id=UserId(value=item["user_id"]),
        flight_id=FlightId(value=item["flight_id"]),
        passenger_count=int(item["passenger_count"]),
        seat_ids=[SeatId(value=seat_item["seat_id"]) for seat_item in seat_items],
        total_price=Money(
            amount=Decimal(item["total_amount"]),
            currency=Currency(item["currency"]),
        ),
        hold_id=HoldId(value=item["hold_id"]),
        created_at=IsoDateTime.from_string(item["created_at"]),
        hold_expires_at=IsoDateTime.from_string(item["hold_expires_at"]),
        status=BookingStatus(item["status"]),
        payment_status=PaymentStatus(item["payment_status"]),
        cancellation_reason=CancellationReason(reason) if reason else None,
    )
