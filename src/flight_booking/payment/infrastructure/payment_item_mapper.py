from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain import Payment, PaymentId, TransactionId
from flight_booking.shared.domain import IsoDateTime, PaymentStatus


def payment_to_item(payment: Payment) -> dict:
    """Payment をストレージのアイテム形式に変換する"""
    return {
        "entity_type": "PAYMENT",
        "payment_id": str(payment.id),
        "booking_id": str(payment.booking_id),
        "transaction_id": str(payment.transaction_id),
        "status": payment.status.value,
        "recorded_at": str(payment.recorded_at),
    }


def item_to_payment(item: dict) -> Payment:
    """アイテムを Payment エンティティに変換する"""
    return Payment(
        id=PaymentId(value=item["payment_id"]),
        booking_id=BookingId(value=item["booking_id"]),
        transaction_id=TransactionId(value=item["transaction_id"]),
        status=PaymentStatus(item["status"]),
        recorded_at=IsoDateTime.from_string(item["recorded_at"]),
    )
