from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from flight_booking.booking.domain import (
    Booking,
    BookingId,
    BookingNumber,
    BookingNumberGenerator,
    BookingStatus,
    UserId,
)
from flight_booking.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)
from flight_booking.bootstrap import build_orchestrator
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
from flight_booking.inventory.infrastructure.in_memory_flight_repository import (
    InMemoryFlightRepository,
)
from flight_booking.payment.infrastructure.in_memory_payment_repository import (
    InMemoryPaymentRepository,
)
from flight_booking.shared.domain import IsoDateTime, Money, PaymentStatus
from flight_booking.shared.utils import Settings


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def create_flight():
    """Flight を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        flight_id: str = "FL-001",
        flight_number: str = "NH001",
        origin: str = "HND",
        destination: str = "CTS",
        departure_time: str = "2025-01-01T10:00:00",
        arrival_time: str = "2025-01-01T12:00:00",
        total_seats: int = 4,
        available_seats: int | None = None,
        status: FlightStatus = FlightStatus.SCHEDULED,
    ) -> Flight:
        return Flight(
            id=FlightId(value=flight_id),
            flight_number=FlightNumber(value=flight_number),
            route=Route.of(origin, destination),
            departure_time=IsoDateTime.from_string(departure_time),
            arrival_time=IsoDateTime.from_string(arrival_time),
            total_seats=total_seats,
            available_seats=available_seats,
            status=status,
        )

    return _factory


@pytest.fixture
def create_seat():
    """Seat を生成する Factory fixture"""

    def _factory(
        seat_id: str = "01A",
        flight_id: str = "FL-001",
        seat_class: SeatClass = SeatClass.ECONOMY,
        price_amount: Decimal = Decimal("10000"),
        status: SeatStatus = SeatStatus.AVAILABLE,
        held_by: str | None = None,
    ) -> Seat:
        return Seat(
            id=SeatId(value=seat_id),
            flight_id=FlightId(value=flight_id),
            seat_class=seat_class,
            price=Money.jpy(price_amount),
            status=status,
            held_by=HoldId(value=held_by) if held_by else None,
        )

    return _factory


@pytest.fixture
def create_booking():
    """Booking を生成する Factory fixture"""

    def _factory(
        booking_id: str = "booking-1",
        booking_number: str = "BK1735689600000ABC123",
        user_id: str = "user-1",
        flight_id: str = "FL-001",
        seat_ids: tuple[str, ...] = ("01A", "01B"),
        passenger_count: int | None = None,
        total_amount: Decimal = Decimal("20000"),
        hold_id: str = "hold-1",
        created_at: str = "2025-01-01T09:00:00",
        hold_expires_at: str = "2025-01-01T09:15:00",
        status: BookingStatus = BookingStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
    ) -> Booking:
        return Booking(
            id=BookingId(value=booking_id),
            booking_number=BookingNumber(value=booking_number),
            user_id=UserId(value=user_id),
            flight_id=FlightId(value=flight_id),
            passenger_count=passenger_count or len(seat_ids),
            seat_ids=[SeatId(value=seat_id) for seat_id in seat_ids],
            total_price=Money.jpy(total_amount),
            hold_id=HoldId(value=hold_id),
            created_at=IsoDateTime.from_string(created_at),
            hold_expires_at=IsoDateTime.from_string(hold_expires_at),
            status=status,
            payment_status=payment_status,
        )

    return _factory


@pytest.fixture
def flight_repository(create_flight, create_seat):
    """座席を投入済みの InMemoryFlightRepository

    FL-001: ECONOMY 01A/01B/01C（各10000円）、BUSINESS 02A（30000円）
    """
    repository = InMemoryFlightRepository()
    repository.save(create_flight())
    repository.save_seats(
        [
            create_seat("01A"),
            create_seat("01B"),
            create_seat("01C"),
            create_seat(
                "02A", seat_class=SeatClass.BUSINESS, price_amount=Decimal("30000")
            ),
        ]
    )
    return repository


@pytest.fixture
def booking_repository():
    return InMemoryBookingRepository()


@pytest.fixture
def payment_repository():
    return InMemoryPaymentRepository()


@pytest.fixture
def settings():
    return Settings(
        table_name=None,
        hold_duration=timedelta(minutes=15),
        booking_number_max_attempts=5,
    )


@pytest.fixture
def orchestrator(settings, flight_repository, booking_repository, payment_repository):
    """メモリ上のリポジトリで組み立てた BookingOrchestrator"""
    return build_orchestrator(
        settings,
        flight_repository=flight_repository,
        booking_repository=booking_repository,
        payment_repository=payment_repository,
        number_generator=BookingNumberGenerator(),
    )


@dataclass
class FakeLambdaContext:
    function_name: str = "test-function"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:ap-northeast-1:123456789012:function:test"
    aws_request_id: str = "request-id"


@pytest.fixture
def lambda_context():
    """Lambda コンテキストのフィクスチャ"""
    return FakeLambdaContext()
