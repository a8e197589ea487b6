from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_booking.booking.domain import BookingNumber
from flight_booking.bootstrap import get_orchestrator
from flight_booking.reservation.handlers.response_models import to_booking_response
from flight_booking.shared.domain import DomainException
from flight_booking.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約照会 Lambda Handler（GET /bookings/{booking_number}）"""

    path_params = event.path_parameters or {}
    booking_number = path_params.get("booking_number")

    if not booking_number:
        return api_response(400, {"message": "booking_number is required"})

    logger.info("Fetching booking", extra={"booking_number": booking_number})

    try:
        detail = get_orchestrator().get_booking(BookingNumber(value=booking_number))
        return api_response(200, to_booking_response(detail))

    except DomainException as e:
        return error_response(e)
    except Exception as e:
        logger.exception("Failed to fetch booking")
        return error_response(e)
