from aws_lambda_powertools import Logger

from flight_booking.booking.applications.cancel_booking import CancelBookingService
from flight_booking.booking.applications.create_booking import CreateBookingService
from flight_booking.booking.applications.query_bookings import BookingQueryService
from flight_booking.booking.applications.settle_payment import (
    SettleBookingPaymentService,
)
from flight_booking.booking.domain import (
    AlreadyFinalizedException,
    Booking,
    BookingNotFoundException,
    BookingNumber,
    CancellationReason,
    UserId,
)
from flight_booking.inventory.applications.query_flights import FlightQueryService
from flight_booking.inventory.applications.release_seats import ReleaseSeatsService
from flight_booking.inventory.applications.reserve_seats import ReserveSeatsService
from flight_booking.inventory.domain import Flight, FlightId, Route, SeatClass
from flight_booking.payment.applications.query_payments import PaymentQueryService
from flight_booking.payment.applications.record_payment import (
    RecordPaymentAttemptService,
)
from flight_booking.payment.domain import TransactionId
from flight_booking.reservation.domain import (
    BookingDetail,
    PaymentAcknowledgement,
    ReservationResult,
    ReservationSaga,
    ReservationState,
    SweepReport,
)
from flight_booking.shared.domain import (
    CompensationFailedException,
    IsoDateTime,
    PaymentStatus,
    ValidationException,
)

logger = Logger(child=True)


class BookingOrchestrator:
    """予約処理のファサード

    座席在庫・予約台帳・決済記録を組み合わせ、途中で失敗した場合は
    完了済みのステップを補償処理で取り消す。補償処理を行うのはこのクラスだけ。
    """

    def __init__(
        self,
        flight_query: FlightQueryService,
        reserve_seats: ReserveSeatsService,
        release_seats: ReleaseSeatsService,
        create_booking: CreateBookingService,
        cancel_booking: CancelBookingService,
        settle_payment: SettleBookingPaymentService,
        booking_query: BookingQueryService,
        record_payment: RecordPaymentAttemptService,
        payment_query: PaymentQueryService,
    ) -> None:
        self._flight_query = flight_query
        self._reserve_seats = reserve_seats
        self._release_seats = release_seats
        self._create_booking = create_booking
        self._cancel_booking = cancel_booking
        self._settle_payment = settle_payment
        self._booking_query = booking_query
        self._record_payment = record_payment
        self._payment_query = payment_query

    def search_available_flights(
        self,
        origin: str,
        destination: str,
        departure_from: IsoDateTime,
        departure_to: IsoDateTime,
    ) -> list[Flight]:
        """予約可能なフライトを検索する"""
        route = Route.of(origin, destination)
        return self._flight_query.search_available(route, departure_from, departure_to)

    def reserve(
        self,
        user_id: UserId,
        flight_id: FlightId,
        seat_class: SeatClass,
        passenger_count: int,
    ) -> ReservationResult:
        """座席を確保して決済待ちの予約を作成する

        座席確保の後で失敗した場合は、確保した座席を解放してから失敗を返す。
        """
        saga = ReservationSaga()
        try:
            hold = self._reserve_seats.reserve(flight_id, seat_class, passenger_count)
            saga.advance(
                ReservationState.SEATS_HELD,
                compensation=lambda: self._release_seats.release(
                    hold.flight_id, hold.seat_ids, hold.hold_id
                ),
                name="release seats",
            )

            booking = self._create_booking.create(
                user_id=user_id,
                flight_id=hold.flight_id,
                passenger_count=hold.count,
                seat_ids=hold.seat_ids,
                total_price=hold.total_price,
                hold_id=hold.hold_id,
            )
            # 予約のキャンセルは座席の解放を含む
            saga.advance(
                ReservationState.BOOKING_CREATED,
                compensation=lambda: self._cancel_booking.cancel(
                    booking.id, CancellationReason.RESERVATION_ABORTED
                ),
                name="cancel booking",
                supersede=True,
            )
            saga.advance(ReservationState.AWAITING_PAYMENT)
        except Exception as e:
            if not saga.has_compensations:
                raise
            self._compensate(saga, e, flight_id)
            raise

        logger.info(
            "Seats reserved",
            extra={
                "booking_number": str(booking.booking_number),
                "flight_id": str(booking.flight_id),
                "seat_ids": [str(seat_id) for seat_id in booking.seat_ids],
            },
        )
        return ReservationResult(
            booking_number=booking.booking_number,
            flight_id=booking.flight_id,
            seat_ids=booking.seat_ids,
            total_price=booking.total_price,
            hold_expires_at=booking.hold_expires_at,
        )

    def report_payment(
        self,
        booking_number: BookingNumber,
        transaction_id: TransactionId,
        outcome: PaymentStatus,
    ) -> PaymentAcknowledgement:
        """決済結果を記録し、予約を確定・解放・返金に進める

        既に確定または解放済みの予約に対する成功・失敗の報告は、
        予約を変更せず already_finalized=True で受領する。
        """
        booking = self._booking_query.get_by_number(booking_number)
        self._record_payment.ensure_unrecorded(transaction_id)

        if outcome is PaymentStatus.REFUNDED:
            return self._refund(booking, transaction_id)

        if outcome is PaymentStatus.PENDING:
            raise ValidationException("Payment outcome must be PAID, FAILED or REFUNDED")

        if not booking.is_awaiting_payment:
            logger.info(
                "Payment reported for finalized booking",
                extra={
                    "booking_number": str(booking_number),
                    "transaction_id": str(transaction_id),
                    "outcome": outcome.value,
                },
            )
            return self._acknowledge(
                booking, transaction_id, outcome, already_finalized=True
            )

        self._record_payment.record(booking, transaction_id, outcome)
        try:
            if outcome is PaymentStatus.PAID:
                booking = self._settle_payment.confirm_paid(booking.id)
            else:
                booking = self._cancel_booking.cancel(
                    booking.id, CancellationReason.PAYMENT_FAILED
                )
        except AlreadyFinalizedException:
            # 記録は残る（返金などの後続対応は決済記録から行う）
            logger.warning(
                "Booking finalized concurrently with payment report",
                extra={
                    "booking_number": str(booking_number),
                    "transaction_id": str(transaction_id),
                    "outcome": outcome.value,
                },
            )
            booking = self._booking_query.get(booking.id)
            return self._acknowledge(
                booking, transaction_id, outcome, already_finalized=True
            )

        return self._acknowledge(booking, transaction_id, outcome)

    def cancel(self, booking_number: BookingNumber, requester_id: UserId) -> BookingDetail:
        """予約者本人の依頼で予約をキャンセルし、座席を解放する"""
        booking = self._booking_query.get_by_number(booking_number)
        if booking.user_id != requester_id:
            # 他人の予約の存在は明かさない
            raise BookingNotFoundException(f"Booking not found: {booking_number}")

        booking = self._cancel_booking.cancel(booking.id, CancellationReason.USER_REQUEST)
        return BookingDetail.of(booking, self._payment_query.by_booking(booking.id))

    def get_booking(self, booking_number: BookingNumber) -> BookingDetail:
        booking = self._booking_query.get_by_number(booking_number)
        return BookingDetail.of(booking, self._payment_query.by_booking(booking.id))

    def sweep_expired_holds(self, now: IsoDateTime | None = None) -> SweepReport:
        """期限切れの仮押さえを解放し、解放が途中で止まった予約を修復する

        何度実行してもよく、決済結果の報告と並行して実行してもよい。
        """
        now = now or IsoDateTime.now()
        report = SweepReport()

        for booking in self._booking_query.expired_holds(now):
            try:
                self._cancel_booking.cancel(booking.id, CancellationReason.HOLD_EXPIRED)
            except AlreadyFinalizedException:
                report.already_finalized.append(booking.booking_number)
            except Exception as e:
                logger.exception(
                    "Failed to release expired hold",
                    extra={"booking_number": str(booking.booking_number)},
                )
                report.failed[booking.booking_number] = str(e)
            else:
                report.released.append(booking.booking_number)

        for booking in self._booking_query.unreleased_cancellations():
            try:
                self._cancel_booking.release_held_seats(booking)
            except Exception as e:
                logger.exception(
                    "Failed to release seats of cancelled booking",
                    extra={"booking_number": str(booking.booking_number)},
                )
                report.failed[booking.booking_number] = str(e)
            else:
                report.repaired.append(booking.booking_number)

        logger.info(
            "Expired holds swept",
            extra={
                "released": len(report.released),
                "already_finalized": len(report.already_finalized),
                "repaired": len(report.repaired),
                "failed": len(report.failed),
            },
        )
        return report

    def _compensate(
        self, saga: ReservationSaga, error: Exception, flight_id: FlightId
    ) -> None:
        """完了済みステップを取り消す（呼び出し側の except 節から呼ぶ）"""
        errors = saga.compensate()
        if errors:
            logger.exception(
                "Reservation compensation failed",
                extra={
                    "flight_id": str(flight_id),
                    "compensation_errors": [str(e) for e in errors],
                },
            )
            raise CompensationFailedException(error, errors) from error

        logger.warning(
            "Reservation compensated",
            extra={"flight_id": str(flight_id), "reason": type(error).__name__},
        )

    def _refund(
        self, booking: Booking, transaction_id: TransactionId
    ) -> PaymentAcknowledgement:
        """返金を予約に反映してから記録する（反映に失敗した場合は記録しない）"""
        self._record_payment.ensure_recordable(
            booking, transaction_id, PaymentStatus.REFUNDED
        )
        refunded = self._settle_payment.refund(booking.id)
        try:
            self._record_payment.record(booking, transaction_id, PaymentStatus.REFUNDED)
        except Exception:
            logger.exception(
                "Refund applied without payment record",
                extra={
                    "booking_number": str(booking.booking_number),
                    "transaction_id": str(transaction_id),
                },
            )
            raise
        return self._acknowledge(refunded, transaction_id, PaymentStatus.REFUNDED)

    @staticmethod
    def _acknowledge(
        booking: Booking,
        transaction_id: TransactionId,
        outcome: PaymentStatus,
        already_finalized: bool = False,
    ) -> PaymentAcknowledgement:
        return PaymentAcknowledgement(
            booking_number=booking.booking_number,
            transaction_id=transaction_id,
            outcome=outcome,
            booking_status=booking.status,
            payment_status=booking.payment_status,
            already_finalized=already_finalized,
        )
