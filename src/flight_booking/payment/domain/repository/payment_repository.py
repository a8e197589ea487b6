from abc import abstractmethod

from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain.entity import Payment
from flight_booking.payment.domain.value_object import PaymentId, TransactionId
from flight_booking.shared.domain import PaymentStatus, Repository


class PaymentRepository(Repository[Payment, PaymentId]):
    """決済記録リポジトリのインターフェース"""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """決済記録を保存する

        取引IDの一意性も同じ書き込みで保証し、重複時は
        DuplicateTransactionException を送出する。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_transaction_id(self, transaction_id: TransactionId) -> Payment | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        """予約の決済記録（記録日時順）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: PaymentStatus) -> list[Payment]:
        raise NotImplementedError
