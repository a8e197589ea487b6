import json
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from flight_booking.booking.domain import (
    AlreadyFinalizedException,
    BookingNotFoundException,
    BookingNumber,
    BookingStatus,
    UserId,
)
from flight_booking.inventory.domain import FlightId, SeatClass, SeatId
from flight_booking.payment.domain import TransactionId
from flight_booking.reservation.domain import (
    BookingDetail,
    PaymentAcknowledgement,
    ReservationResult,
    SweepReport,
)
from flight_booking.reservation.handlers import (
    cancel,
    get_booking,
    report_payment,
    reserve,
    sweep,
)
from flight_booking.shared.domain import (
    CompensationFailedException,
    ConflictException,
    InsufficientCapacityException,
    IsoDateTime,
    Money,
    PaymentStatus,
)

BOOKING_NUMBER = "BK1735689600000ABC123"


def api_event(body: dict | None = None, path_parameters: dict | None = None) -> dict:
    """API Gateway (REST) のプロキシイベント"""
    return {
        "httpMethod": "POST",
        "path": "/bookings",
        "headers": {"Content-Type": "application/json"},
        "pathParameters": path_parameters,
        "queryStringParameters": None,
        "body": json.dumps(body) if body is not None else None,
        "isBase64Encoded": False,
        "requestContext": {"requestId": "request-id", "stage": "test"},
    }


@pytest.fixture
def mock_orchestrator():
    return MagicMock()


def patch_orchestrator(module, orchestrator):
    return patch.object(module, "get_orchestrator", return_value=orchestrator)


class TestReserveHandler:
    def test_reserve_returns_201(self, mock_orchestrator, lambda_context):
        # Arrange
        mock_orchestrator.reserve.return_value = ReservationResult(
            booking_number=BookingNumber(BOOKING_NUMBER),
            flight_id=FlightId("FL-001"),
            seat_ids=(SeatId("01A"), SeatId("01B")),
            total_price=Money.jpy(Decimal("20000")),
            hold_expires_at=IsoDateTime.from_string("2025-01-01T09:15:00"),
        )
        event = api_event(
            {"user_id": "user-1", "flight_id": "FL-001", "seat_class": "economy",
             "passenger_count": 2}
        )

        # Act
        with patch_orchestrator(reserve, mock_orchestrator):
            response = reserve.lambda_handler(event, lambda_context)

        # Assert
        assert response["statusCode"] == 201
        body = json.loads(response["body"])
        assert body["data"]["booking_number"] == BOOKING_NUMBER
        assert body["data"]["seat_ids"] == ["01A", "01B"]
        assert body["data"]["total_amount"] == "20000"
        mock_orchestrator.reserve.assert_called_once_with(
            user_id=UserId("user-1"),
            flight_id=FlightId("FL-001"),
            seat_class=SeatClass.ECONOMY,
            passenger_count=2,
        )

    @pytest.mark.parametrize(
        "body",
        [
            {"user_id": "user-1", "flight_id": "FL-001", "passenger_count": 0},
            {"flight_id": "FL-001", "passenger_count": 1},
            {"user_id": "user-1", "flight_id": "FL-001", "seat_class": "SUITE",
             "passenger_count": 1},
        ],
    )
    def test_invalid_request_returns_400(self, mock_orchestrator, lambda_context, body):
        with patch_orchestrator(reserve, mock_orchestrator):
            response = reserve.lambda_handler(api_event(body), lambda_context)

        assert response["statusCode"] == 400
        mock_orchestrator.reserve.assert_not_called()

    @pytest.mark.parametrize(
        "error, status_code, reason",
        [
            (InsufficientCapacityException("full"), 409, "INSUFFICIENT_CAPACITY"),
            (ConflictException("busy"), 409, "CONFLICT"),
            (
                CompensationFailedException(ConflictException("x"), [RuntimeError("y")]),
                500,
                "COMPENSATION_FAILED",
            ),
        ],
    )
    def test_failures_are_mapped(
        self, mock_orchestrator, lambda_context, error, status_code, reason
    ):
        mock_orchestrator.reserve.side_effect = error
        event = api_event({"user_id": "user-1", "flight_id": "FL-001", "passenger_count": 1})

        with patch_orchestrator(reserve, mock_orchestrator):
            response = reserve.lambda_handler(event, lambda_context)

        assert response["statusCode"] == status_code
        assert json.loads(response["body"])["reason"] == reason

    def test_unexpected_error_returns_500(self, mock_orchestrator, lambda_context):
        mock_orchestrator.reserve.side_effect = RuntimeError("boom")
        event = api_event({"user_id": "user-1", "flight_id": "FL-001", "passenger_count": 1})

        with patch_orchestrator(reserve, mock_orchestrator):
            response = reserve.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 500
        assert "boom" not in response["body"]


class TestReportPaymentHandler:
    def test_acknowledges_finalized_booking_with_200(self, mock_orchestrator, lambda_context):
        mock_orchestrator.report_payment.return_value = PaymentAcknowledgement(
            booking_number=BookingNumber(BOOKING_NUMBER),
            transaction_id=TransactionId("tx-001"),
            outcome=PaymentStatus.PAID,
            booking_status=BookingStatus.CANCELLED,
            payment_status=PaymentStatus.PENDING,
            already_finalized=True,
        )
        event = api_event(
            {"transaction_id": "tx-001", "outcome": "paid"},
            {"booking_number": BOOKING_NUMBER},
        )

        with patch_orchestrator(report_payment, mock_orchestrator):
            response = report_payment.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        data = json.loads(response["body"])["data"]
        assert data["already_finalized"] is True
        assert data["booking_status"] == "CANCELLED"
        assert mock_orchestrator.report_payment.call_args.kwargs["outcome"] is (
            PaymentStatus.PAID
        )

    def test_unknown_outcome_returns_400(self, mock_orchestrator, lambda_context):
        event = api_event(
            {"transaction_id": "tx-001", "outcome": "MAYBE"},
            {"booking_number": BOOKING_NUMBER},
        )

        with patch_orchestrator(report_payment, mock_orchestrator):
            response = report_payment.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400

    def test_missing_booking_number_returns_400(self, mock_orchestrator, lambda_context):
        event = api_event({"transaction_id": "tx-001", "outcome": "PAID"})

        with patch_orchestrator(report_payment, mock_orchestrator):
            response = report_payment.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400

    def test_conflict_returns_409(self, mock_orchestrator, lambda_context):
        mock_orchestrator.report_payment.side_effect = AlreadyFinalizedException("x")
        event = api_event(
            {"transaction_id": "tx-001", "outcome": "PAID"},
            {"booking_number": BOOKING_NUMBER},
        )

        with patch_orchestrator(report_payment, mock_orchestrator):
            response = report_payment.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 409


@pytest.fixture
def booking_detail(create_booking):
    return BookingDetail.of(create_booking())


class TestGetBookingHandler:
    def test_get_booking(self, mock_orchestrator, lambda_context, booking_detail):
        mock_orchestrator.get_booking.return_value = booking_detail
        event = api_event(path_parameters={"booking_number": BOOKING_NUMBER})

        with patch_orchestrator(get_booking, mock_orchestrator):
            response = get_booking.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        data = json.loads(response["body"])["data"]
        assert data["status"] == "PENDING"
        assert data["reservation_state"] == "AWAITING_PAYMENT"
        assert data["payments"] == []

    def test_not_found_returns_404(self, mock_orchestrator, lambda_context):
        mock_orchestrator.get_booking.side_effect = BookingNotFoundException("x")
        event = api_event(path_parameters={"booking_number": BOOKING_NUMBER})

        with patch_orchestrator(get_booking, mock_orchestrator):
            response = get_booking.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 404

    def test_malformed_booking_number_returns_400(self, mock_orchestrator, lambda_context):
        event = api_event(path_parameters={"booking_number": "not-a-number"})

        with patch_orchestrator(get_booking, mock_orchestrator):
            response = get_booking.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400


class TestCancelHandler:
    def test_cancel(self, mock_orchestrator, lambda_context, booking_detail):
        mock_orchestrator.cancel.return_value = booking_detail
        event = api_event(
            {"requester_id": "user-1"}, {"booking_number": BOOKING_NUMBER}
        )

        with patch_orchestrator(cancel, mock_orchestrator):
            response = cancel.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        mock_orchestrator.cancel.assert_called_once_with(
            booking_number=BookingNumber(BOOKING_NUMBER),
            requester_id=UserId("user-1"),
        )

    def test_missing_requester_returns_400(self, mock_orchestrator, lambda_context):
        event = api_event({}, {"booking_number": BOOKING_NUMBER})

        with patch_orchestrator(cancel, mock_orchestrator):
            response = cancel.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 400
        mock_orchestrator.cancel.assert_not_called()


class TestSweepHandler:
    def test_sweep_returns_report(self, mock_orchestrator, lambda_context):
        mock_orchestrator.sweep_expired_holds.return_value = SweepReport(
            released=[BookingNumber(BOOKING_NUMBER)],
            failed={BookingNumber("BK1735689600001DEF456"): "storage unavailable"},
        )

        with patch_orchestrator(sweep, mock_orchestrator):
            response = sweep.lambda_handler({"source": "aws.events"}, lambda_context)

        assert response["released"] == [BOOKING_NUMBER]
        assert response["failed"] == {"BK1735689600001DEF456": "storage unavailable"}
