from .booking_status import BookingStatus as BookingStatus
from .cancellation_reason import CancellationReason as CancellationReason
