import pytest

from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain import Payment, PaymentFactory, TransactionId
from flight_booking.shared.domain import IsoDateTime, PaymentStatus, ValidationException


class TestPaymentFactory:
    def test_create_payment(self):
        factory = PaymentFactory()
        recorded_at = IsoDateTime.from_string("2025-01-01T09:05:00")

        payment = factory.create(
            booking_id=BookingId("booking-1"),
            transaction_id=TransactionId("tx-001"),
            status=PaymentStatus.PAID,
            recorded_at=recorded_at,
        )

        assert isinstance(payment, Payment)
        assert payment.booking_id == BookingId("booking-1")
        assert payment.recorded_at == recorded_at
        assert payment.is_paid

    def test_pending_outcome_raises(self):
        with pytest.raises(ValidationException):
            PaymentFactory().create(
                booking_id=BookingId("booking-1"),
                transaction_id=TransactionId("tx-001"),
                status=PaymentStatus.PENDING,
            )


class TestTransactionId:
    def test_value_is_stripped(self):
        assert TransactionId("  tx-001 ").value == "tx-001"

    @pytest.mark.parametrize("value", ["", "   ", "x" * 129])
    def test_invalid_value_raises(self, value):
        with pytest.raises(ValidationException):
            TransactionId(value)
