import threading

from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain import (
    DuplicateTransactionException,
    Payment,
    PaymentId,
    PaymentRepository,
    TransactionId,
)
from flight_booking.payment.infrastructure.payment_item_mapper import (
    item_to_payment,
    payment_to_item,
)
from flight_booking.shared.domain import PaymentStatus
from flight_booking.shared.domain.exception import DuplicateResourceException


class InMemoryPaymentRepository(PaymentRepository):
    """メモリ上の PaymentRepository 実装（ローカル実行・テスト用）"""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._payments: dict[PaymentId, dict] = {}
        self._transactions: dict[TransactionId, PaymentId] = {}

    def save(self, payment: Payment) -> None:
        with self._lock:
            if payment.transaction_id in self._transactions:
                raise DuplicateTransactionException(
                    f"Transaction already recorded: {payment.transaction_id}"
                )
            if payment.id in self._payments:
                raise DuplicateResourceException(f"Payment already exists: {payment.id}")
            self._payments[payment.id] = payment_to_item(payment)
            self._transactions[payment.transaction_id] = payment.id

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        with self._lock:
            item = self._payments.get(payment_id)
            return item_to_payment(item) if item else None

    def find_by_transaction_id(self, transaction_id: TransactionId) -> Payment | None:
        with self._lock:
            payment_id = self._transactions.get(transaction_id)
            return self.find_by_id(payment_id) if payment_id else None

    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        with self._lock:
            items = [
                item
                for item in self._payments.values()
                if item["booking_id"] == str(booking_id)
            ]
        return sorted(map(item_to_payment, items), key=lambda p: p.recorded_at)

    def find_by_status(self, status: PaymentStatus) -> list[Payment]:
        with self._lock:
            items = [
                item for item in self._payments.values() if item["status"] == status.value
            ]
        return sorted(map(item_to_payment, items), key=lambda p: p.recorded_at)
