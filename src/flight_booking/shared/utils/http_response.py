import json

from pydantic import ValidationError

from flight_booking.shared.domain.exception import (
    CompensationFailedException,
    ConflictException,
    DomainException,
    InsufficientCapacityException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway REST API のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


# 上から順に判定する（サブクラスを先に並べる）
_STATUS_BY_EXCEPTION: list[tuple[type[Exception], int, str]] = [
    (CompensationFailedException, 500, "COMPENSATION_FAILED"),
    (ResourceNotFoundException, 404, "NOT_FOUND"),
    (InsufficientCapacityException, 409, "INSUFFICIENT_CAPACITY"),
    (InvalidStateException, 409, "INVALID_STATE"),
    (ConflictException, 409, "CONFLICT"),
    (ValidationException, 400, "VALIDATION_ERROR"),
    (ValidationError, 400, "VALIDATION_ERROR"),
    (DomainException, 422, "BUSINESS_RULE_VIOLATION"),
]


def error_response(error: Exception) -> dict:
    """ドメイン例外を理由付きのエラーレスポンスに変換する"""
    for exception_type, status_code, reason in _STATUS_BY_EXCEPTION:
        if isinstance(error, exception_type):
            return api_response(
                status_code,
                {
                    "status": "error",
                    "reason": reason,
                    "error": type(error).__name__,
                    "message": str(error),
                },
            )
    return api_response(
        500,
        {
            "status": "error",
            "reason": "INTERNAL_ERROR",
            "message": "Internal server error",
        },
    )
