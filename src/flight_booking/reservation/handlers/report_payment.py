from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from flight_booking.booking.domain import BookingNumber
from flight_booking.bootstrap import get_orchestrator
from flight_booking.payment.domain import TransactionId
from flight_booking.reservation.handlers.request_models import ReportPaymentRequest
from flight_booking.reservation.handlers.response_models import (
    to_acknowledgement_response,
)
from flight_booking.shared.domain import DomainException
from flight_booking.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """決済結果報告 Lambda Handler（POST /bookings/{booking_number}/payments）

    確定・解放済みの予約への報告はエラーにせず、already_finalized 付きで受領する。
    """

    path_params = event.path_parameters or {}
    booking_number = path_params.get("booking_number")

    if not booking_number:
        return api_response(400, {"message": "booking_number is required"})

    try:
        request = ReportPaymentRequest.model_validate_json(event.body or "{}")
        logger.info(
            "Received payment report",
            extra={
                "booking_number": booking_number,
                "transaction_id": request.transaction_id,
                "outcome": request.outcome.value,
            },
        )

        ack = get_orchestrator().report_payment(
            booking_number=BookingNumber(value=booking_number),
            transaction_id=TransactionId(value=request.transaction_id),
            outcome=request.outcome,
        )
        return api_response(200, to_acknowledgement_response(ack))

    except (DomainException, ValidationError) as e:
        logger.info("Payment report rejected", extra={"error": type(e).__name__})
        return error_response(e)
    except Exception as e:
        logger.exception("Failed to process payment report")
        return error_response(e)
