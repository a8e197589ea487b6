from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain.value_object import PaymentId, TransactionId
from flight_booking.shared.domain import AggregateRoot, IsoDateTime, PaymentStatus


class Payment(AggregateRoot[PaymentId]):
    """決済の試行記録

    決済ゲートウェイから報告された1回の結果を表し、記録後は変更しない。
    """

    def __init__(
        self,
        id: PaymentId,
        booking_id: BookingId,
        transaction_id: TransactionId,
        status: PaymentStatus,
        recorded_at: IsoDateTime,
    ) -> None:
        super().__init__(id)
        self._booking_id = booking_id
        self._transaction_id = transaction_id
        self._status = status
        self._recorded_at = recorded_at

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def transaction_id(self) -> TransactionId:
        return self._transaction_id

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def recorded_at(self) -> IsoDateTime:
        return self._recorded_at

    @property
    def is_paid(self) -> bool:
        return self._status is PaymentStatus.PAID
