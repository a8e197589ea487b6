from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain.entity import Payment
from flight_booking.payment.domain.value_object import PaymentId, TransactionId
from flight_booking.shared.domain import IsoDateTime, PaymentStatus, ValidationException


class PaymentFactory:
    """決済記録ファクトリ"""

    def create(
        self,
        booking_id: BookingId,
        transaction_id: TransactionId,
        status: PaymentStatus,
        recorded_at: IsoDateTime | None = None,
    ) -> Payment:
        """報告された決済結果から記録を生成する"""
        if status is PaymentStatus.PENDING:
            raise ValidationException("Payment outcome must not be PENDING")

        return Payment(
            id=PaymentId.generate(),
            booking_id=booking_id,
            transaction_id=transaction_id,
            status=status,
            recorded_at=recorded_at or IsoDateTime.now(),
        )
