from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_booking.bootstrap import get_orchestrator
from flight_booking.reservation.handlers.response_models import to_sweep_response

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """期限切れスイープ Lambda Handler（EventBridge スケジュールから起動）"""

    logger.info("Sweeping expired holds")

    report = get_orchestrator().sweep_expired_holds()
    if report.has_failures:
        logger.warning(
            "Sweep finished with failures",
            extra={"failed": {str(k): v for k, v in report.failed.items()}},
        )
    return to_sweep_response(report)
