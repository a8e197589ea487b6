from dataclasses import dataclass

from flight_booking.booking.domain import BookingNumber, BookingStatus
from flight_booking.payment.domain import TransactionId
from flight_booking.shared.domain import PaymentStatus


@dataclass(frozen=True)
class PaymentAcknowledgement:
    """決済結果の受領応答

    already_finalized が True の場合、予約は既に確定または解放済みで、
    今回の報告は予約の状態を変えていない。
    """

    booking_number: BookingNumber
    transaction_id: TransactionId
    outcome: PaymentStatus
    booking_status: BookingStatus
    payment_status: PaymentStatus
    already_finalized: bool = False
