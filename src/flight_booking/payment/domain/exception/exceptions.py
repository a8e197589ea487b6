from flight_booking.shared.domain import (
    DuplicateResourceException,
    ResourceNotFoundException,
)


class PaymentNotFoundException(ResourceNotFoundException):
    """決済記録が存在しない場合"""

    pass


class DuplicateTransactionException(DuplicateResourceException):
    """同じ取引IDが既に記録されている場合"""

    pass
