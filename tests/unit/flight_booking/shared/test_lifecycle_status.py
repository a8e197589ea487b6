import pytest

from flight_booking.booking.domain import BookingStatus
from flight_booking.inventory.domain import FlightStatus, SeatStatus
from flight_booking.shared.domain import InvalidTransitionException, PaymentStatus


class TestPaymentStatus:
    """決済ステータスの遷移表のテスト"""

    @pytest.mark.parametrize(
        "current, target",
        [
            (PaymentStatus.PENDING, PaymentStatus.PAID),
            (PaymentStatus.PENDING, PaymentStatus.FAILED),
            (PaymentStatus.PAID, PaymentStatus.REFUNDED),
        ],
    )
    def test_allowed_transitions(self, current, target):
        assert current.can_transition_to(target)

    @pytest.mark.parametrize(
        "current, target",
        [
            (PaymentStatus.FAILED, PaymentStatus.PAID),
            (PaymentStatus.PENDING, PaymentStatus.REFUNDED),
            (PaymentStatus.REFUNDED, PaymentStatus.PAID),
        ],
    )
    def test_disallowed_transitions_raise(self, current, target):
        with pytest.raises(InvalidTransitionException):
            current.ensure_can_transition_to(target)


class TestTerminalStates:
    """終端状態のテスト"""

    @pytest.mark.parametrize(
        "status",
        [
            FlightStatus.ARRIVED,
            FlightStatus.CANCELLED,
            SeatStatus.MAINTENANCE,
            BookingStatus.CANCELLED,
            BookingStatus.COMPLETED,
            PaymentStatus.FAILED,
            PaymentStatus.REFUNDED,
        ],
    )
    def test_terminal(self, status):
        assert status.is_terminal

    @pytest.mark.parametrize(
        "status",
        [FlightStatus.SCHEDULED, SeatStatus.OCCUPIED, BookingStatus.CONFIRMED],
    )
    def test_not_terminal(self, status):
        assert not status.is_terminal


class TestFlightStatus:
    def test_delayed_can_return_to_scheduled(self):
        assert FlightStatus.DELAYED.can_transition_to(FlightStatus.SCHEDULED)

    def test_arrived_cannot_be_cancelled(self):
        with pytest.raises(InvalidTransitionException):
            FlightStatus.ARRIVED.ensure_can_transition_to(FlightStatus.CANCELLED)

    def test_only_scheduled_is_bookable(self):
        assert [status for status in FlightStatus if status.is_bookable] == [
            FlightStatus.SCHEDULED
        ]
