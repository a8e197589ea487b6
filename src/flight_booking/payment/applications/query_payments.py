from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain import (
    Payment,
    PaymentNotFoundException,
    PaymentRepository,
    TransactionId,
)
from flight_booking.shared.domain import PaymentStatus


class PaymentQueryService:
    """決済記録の検索（読み取り専用）"""

    def __init__(self, repository: PaymentRepository) -> None:
        self._repository = repository

    def by_transaction_id(self, transaction_id: TransactionId) -> Payment:
        payment = self._repository.find_by_transaction_id(transaction_id)
        if payment is None:
            raise PaymentNotFoundException(f"Payment not found: {transaction_id}")
        return payment

    def by_booking(self, booking_id: BookingId) -> list[Payment]:
        return self._repository.find_by_booking_id(booking_id)

    def by_status(self, status: PaymentStatus) -> list[Payment]:
        return self._repository.find_by_status(status)
