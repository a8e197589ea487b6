from aws_lambda_powertools import Logger

from flight_booking.booking.domain import Booking
from flight_booking.payment.domain import (
    DuplicateTransactionException,
    Payment,
    PaymentFactory,
    PaymentRepository,
    TransactionId,
)
from flight_booking.shared.domain import (
    ConflictException,
    InvalidStateException,
    IsoDateTime,
    PaymentStatus,
)

logger = Logger(child=True)


class RecordPaymentAttemptService:
    """決済結果の記録ユースケース

    成功・失敗は記録してから予約に反映し、返金は予約への反映が済んでから記録する。
    順序は呼び出し側が決める。
    """

    def __init__(self, repository: PaymentRepository, factory: PaymentFactory) -> None:
        self._repository = repository
        self._factory = factory

    def ensure_unrecorded(self, transaction_id: TransactionId) -> None:
        """取引IDが未記録であることを確認する"""
        if self._repository.find_by_transaction_id(transaction_id) is not None:
            raise DuplicateTransactionException(
                f"Transaction already recorded: {transaction_id}"
            )

    def ensure_recordable(
        self, booking: Booking, transaction_id: TransactionId, status: PaymentStatus
    ) -> None:
        """予約に対してこの決済結果を記録できることを確認する"""
        self.ensure_unrecorded(transaction_id)

        if status is PaymentStatus.PAID and any(
            payment.is_paid for payment in self._repository.find_by_booking_id(booking.id)
        ):
            raise ConflictException(
                f"Booking {booking.booking_number} already has a successful payment"
            )
        if (
            status is PaymentStatus.REFUNDED
            and booking.payment_status is not PaymentStatus.PAID
        ):
            raise InvalidStateException(
                f"Cannot refund booking {booking.booking_number}"
                f" (payment_status={booking.payment_status.value})"
            )

    def record(
        self,
        booking: Booking,
        transaction_id: TransactionId,
        status: PaymentStatus,
        recorded_at: IsoDateTime | None = None,
    ) -> Payment:
        """決済結果を記録する"""
        self.ensure_recordable(booking, transaction_id, status)

        payment = self._factory.create(
            booking_id=booking.id,
            transaction_id=transaction_id,
            status=status,
            recorded_at=recorded_at,
        )
        self._repository.save(payment)
        logger.info(
            "Payment attempt recorded",
            extra={
                "booking_number": str(booking.booking_number),
                "transaction_id": str(transaction_id),
                "status": status.value,
            },
        )
        return payment
