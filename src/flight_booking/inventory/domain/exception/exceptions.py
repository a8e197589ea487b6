from flight_booking.shared.domain import (
    InvalidStateException,
    ResourceNotFoundException,
)


class FlightNotFoundException(ResourceNotFoundException):
    """フライトが存在しない場合"""

    pass


class SeatNotFoundException(ResourceNotFoundException):
    """指定した座席がフライトに存在しない場合"""

    pass


class InvalidFlightStateException(InvalidStateException):
    """フライトが予約可能な状態にない場合"""

    pass
