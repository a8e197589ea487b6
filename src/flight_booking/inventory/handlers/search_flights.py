from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from flight_booking.bootstrap import get_orchestrator
from flight_booking.inventory.handlers.request_models import SearchFlightsRequest
from flight_booking.inventory.handlers.response_models import to_response
from flight_booking.shared.domain import DomainException, IsoDateTime
from flight_booking.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト検索 Lambda Handler（GET /flights）"""

    try:
        request = SearchFlightsRequest.model_validate(
            event.query_string_parameters or {}
        )
        logger.info(
            "Searching flights",
            extra={"origin": request.origin, "destination": request.destination},
        )

        flights = get_orchestrator().search_available_flights(
            origin=request.origin,
            destination=request.destination,
            departure_from=IsoDateTime.from_string(request.departure_from),
            departure_to=IsoDateTime.from_string(request.departure_to),
        )
        return api_response(200, to_response(flights))

    except (DomainException, ValidationError) as e:
        logger.info("Flight search rejected", extra={"error": type(e).__name__})
        return error_response(e)
    except Exception as e:
        logger.exception("Failed to search flights")
        return error_response(e)
