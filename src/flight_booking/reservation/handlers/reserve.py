from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from flight_booking.booking.domain import UserId
from flight_booking.bootstrap import get_orchestrator
from flight_booking.inventory.domain import FlightId, SeatClass
from flight_booking.reservation.handlers.request_models import ReserveRequest
from flight_booking.reservation.handlers.response_models import (
    to_reservation_response,
)
from flight_booking.shared.domain import CompensationFailedException, DomainException
from flight_booking.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """座席予約 Lambda Handler（POST /bookings）

    座席を確保して決済待ちの予約を作成し、予約番号と合計金額を返す。
    """

    logger.info("Received reserve request")

    try:
        request = ReserveRequest.model_validate_json(event.body or "{}")
        result = get_orchestrator().reserve(
            user_id=UserId(value=request.user_id),
            flight_id=FlightId(value=request.flight_id),
            seat_class=SeatClass.parse(request.seat_class),
            passenger_count=request.passenger_count,
        )
        return api_response(201, to_reservation_response(result))

    except CompensationFailedException as e:
        logger.exception("Reservation failed and could not be compensated")
        return error_response(e)
    except (DomainException, ValidationError) as e:
        logger.info("Reservation rejected", extra={"error": type(e).__name__})
        return error_response(e)
    except Exception as e:
        logger.exception("Failed to reserve seats")
        return error_response(e)
