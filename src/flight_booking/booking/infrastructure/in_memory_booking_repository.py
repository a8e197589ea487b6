import threading
from typing import Callable, Sequence

from flight_booking.booking.domain import (
    Booking,
    BookingId,
    BookingNumber,
    BookingRepository,
    BookingSeat,
    BookingStatus,
    UserId,
)
from flight_booking.booking.infrastructure.booking_item_mapper import (
    booking_seat_to_item,
    booking_to_item,
    item_to_booking,
)
from flight_booking.inventory.domain import FlightId
from flight_booking.shared.domain import IsoDateTime, PaymentStatus
from flight_booking.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)


class InMemoryBookingRepository(BookingRepository):
    """メモリ上の BookingRepository 実装（ローカル実行・テスト用）"""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._bookings: dict[BookingId, dict] = {}
        self._seats: dict[BookingId, dict[tuple[str, str], dict]] = {}
        self._numbers: dict[BookingNumber, BookingId] = {}

    def save(self, booking: Booking) -> None:
        with self._lock:
            if booking.id in self._bookings:
                raise DuplicateResourceException(f"Booking already exists: {booking.id}")
            if booking.booking_number in self._numbers:
                raise DuplicateResourceException(
                    f"Booking number already in use: {booking.booking_number}"
                )
            self._bookings[booking.id] = booking_to_item(booking)
            self._seats[booking.id] = {
                (str(seat.flight_id), str(seat.seat_id)): booking_seat_to_item(seat)
                for seat in booking.seats
            }
            self._numbers[booking.booking_number] = booking.id

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        with self._lock:
            return self._load(booking_id)

    def find_by_booking_number(self, booking_number: BookingNumber) -> Booking | None:
        with self._lock:
            booking_id = self._numbers.get(booking_number)
            return self._load(booking_id) if booking_id else None

    def exists_booking_number(self, booking_number: BookingNumber) -> bool:
        with self._lock:
            return booking_number in self._numbers

    def find_by_user_id(
        self, user_id: UserId, status: BookingStatus | None = None
    ) -> list[Booking]:
        bookings = self._select(
            lambda item: item["user_id"] == str(user_id)
            and (status is None or item["status"] == status.value)
        )
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def find_by_flight_id(self, flight_id: FlightId) -> list[Booking]:
        return self._select(lambda item: item["flight_id"] == str(flight_id))

    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        return self._select(lambda item: item["status"] == status.value)

    def find_by_payment_status(self, payment_status: PaymentStatus) -> list[Booking]:
        return self._select(lambda item: item["payment_status"] == payment_status.value)

    def find_created_between(
        self, start: IsoDateTime, end: IsoDateTime
    ) -> list[Booking]:
        return [
            booking
            for booking in self._select(lambda item: True)
            if not booking.created_at.is_before(start)
            and not booking.created_at.is_after(end)
        ]

    def find_expired_holds(self, now: IsoDateTime) -> list[Booking]:
        return [
            booking
            for booking in self._select(
                lambda item: item["status"] == BookingStatus.PENDING.value
            )
            if booking.is_hold_expired(now)
        ]

    def find_unreleased_cancellations(self) -> list[Booking]:
        with self._lock:
            booking_ids = [
                booking_id
                for booking_id, item in self._bookings.items()
                if item["status"] == BookingStatus.CANCELLED.value
                and self._seats.get(booking_id)
            ]
            return [self._load(booking_id) for booking_id in booking_ids]

    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_payment_status: PaymentStatus,
    ) -> None:
        with self._lock:
            item = self._bookings.get(booking.id)
            if (
                item is None
                or item["status"] != expected_status.value
                or item["payment_status"] != expected_payment_status.value
            ):
                raise OptimisticLockException(
                    f"Booking status conflict: expected "
                    f"{expected_status.value}/{expected_payment_status.value}, "
                    f"booking_id={booking.id}"
                )
            item.update(booking_to_item(booking))

    def remove_booking_seats(self, seats: Sequence[BookingSeat]) -> None:
        with self._lock:
            for seat in seats:
                self._seats.get(seat.booking_id, {}).pop(
                    (str(seat.flight_id), str(seat.seat_id)), None
                )

    def _select(self, predicate: Callable[[dict], bool]) -> list[Booking]:
        with self._lock:
            bookings = [
                self._load(booking_id)
                for booking_id, item in self._bookings.items()
                if predicate(item)
            ]
        return sorted(bookings, key=lambda b: b.created_at)

    def _load(self, booking_id: BookingId) -> Booking | None:
        item = self._bookings.get(booking_id)
        if item is None:
            return None
        return item_to_booking(item, self._seats.get(booking_id, {}).values())
