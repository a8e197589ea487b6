from typing import Sequence

from aws_lambda_powertools import Logger

from flight_booking.booking.domain import (
    Booking,
    BookingFactory,
    BookingNumberExhaustedException,
    BookingNumberGenerator,
    BookingRepository,
    UserId,
)
from flight_booking.inventory.domain import FlightId, HoldId, SeatId
from flight_booking.shared.domain import IsoDateTime, Money
from flight_booking.shared.domain.exception import DuplicateResourceException

logger = Logger(child=True)

DEFAULT_MAX_ATTEMPTS = 5


class CreateBookingService:
    """予約作成ユースケース

    予約番号は「生成してから未使用を確認する」方式で、衝突時は上限回数まで再生成する。
    確認と保存の間に割り込まれた場合も保存時の一意性条件で検出して再試行する。
    """

    def __init__(
        self,
        repository: BookingRepository,
        factory: BookingFactory,
        number_generator: BookingNumberGenerator,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._number_generator = number_generator
        self._max_attempts = max_attempts

    def create(
        self,
        user_id: UserId,
        flight_id: FlightId,
        passenger_count: int,
        seat_ids: Sequence[SeatId],
        total_price: Money,
        hold_id: HoldId,
        now: IsoDateTime | None = None,
    ) -> Booking:
        """PENDING / PENDING の予約を作成する"""
        for attempt in range(1, self._max_attempts + 1):
            booking_number = self._number_generator.next()
            if self._repository.exists_booking_number(booking_number):
                logger.warning(
                    "Booking number collision",
                    extra={"booking_number": str(booking_number), "attempt": attempt},
                )
                continue

            booking = self._factory.create(
                booking_number=booking_number,
                user_id=user_id,
                flight_id=flight_id,
                passenger_count=passenger_count,
                seat_ids=seat_ids,
                total_price=total_price,
                hold_id=hold_id,
                now=now,
            )
            try:
                self._repository.save(booking)
            except DuplicateResourceException:
                logger.warning(
                    "Booking number taken concurrently",
                    extra={"booking_number": str(booking_number), "attempt": attempt},
                )
                continue
            return booking

        raise BookingNumberExhaustedException(
            f"Could not issue a unique booking number in {self._max_attempts} attempts"
        )
