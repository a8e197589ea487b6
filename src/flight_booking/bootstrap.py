from functools import lru_cache

from flight_booking.booking.applications.cancel_booking import CancelBookingService
from flight_booking.booking.applications.create_booking import CreateBookingService
from flight_booking.booking.applications.query_bookings import BookingQueryService
from flight_booking.booking.applications.settle_payment import (
    SettleBookingPaymentService,
)
from flight_booking.booking.domain import (
    BookingFactory,
    BookingNumberGenerator,
    BookingRepository,
)
from flight_booking.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from flight_booking.inventory.applications.query_flights import FlightQueryService
from flight_booking.inventory.applications.release_seats import ReleaseSeatsService
from flight_booking.inventory.applications.reserve_seats import ReserveSeatsService
from flight_booking.inventory.domain import FlightRepository
from flight_booking.inventory.infrastructure.dynamodb_flight_repository import (
    DynamoDBFlightRepository,
)
from flight_booking.payment.applications.query_payments import PaymentQueryService
from flight_booking.payment.applications.record_payment import (
    RecordPaymentAttemptService,
)
from flight_booking.payment.domain import PaymentFactory, PaymentRepository
from flight_booking.payment.infrastructure.dynamodb_payment_repository import (
    DynamoDBPaymentRepository,
)
from flight_booking.reservation.applications.booking_orchestrator import (
    BookingOrchestrator,
)
from flight_booking.shared.utils import Settings


def build_orchestrator(
    settings: Settings,
    flight_repository: FlightRepository,
    booking_repository: BookingRepository,
    payment_repository: PaymentRepository,
    number_generator: BookingNumberGenerator | None = None,
) -> BookingOrchestrator:
    """リポジトリを受け取り、BookingOrchestrator を組み立てる"""
    release_seats = ReleaseSeatsService(flight_repository)
    cancel_booking = CancelBookingService(booking_repository, release_seats)
    return BookingOrchestrator(
        flight_query=FlightQueryService(flight_repository),
        reserve_seats=ReserveSeatsService(flight_repository),
        release_seats=release_seats,
        create_booking=CreateBookingService(
            repository=booking_repository,
            factory=BookingFactory(hold_duration=settings.hold_duration),
            number_generator=number_generator or BookingNumberGenerator(),
            max_attempts=settings.booking_number_max_attempts,
        ),
        cancel_booking=cancel_booking,
        settle_payment=SettleBookingPaymentService(booking_repository),
        booking_query=BookingQueryService(booking_repository),
        record_payment=RecordPaymentAttemptService(payment_repository, PaymentFactory()),
        payment_query=PaymentQueryService(payment_repository),
    )


@lru_cache(maxsize=1)
def get_orchestrator() -> BookingOrchestrator:
    """Lambda 実行環境で再利用する BookingOrchestrator（DynamoDB 利用）"""
    settings = Settings.from_env()
    return build_orchestrator(
        settings,
        flight_repository=DynamoDBFlightRepository(settings.table_name),
        booking_repository=DynamoDBBookingRepository(settings.table_name),
        payment_repository=DynamoDBPaymentRepository(settings.table_name),
    )
