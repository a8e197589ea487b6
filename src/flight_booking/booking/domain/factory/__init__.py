from .booking_factory import BookingFactory as BookingFactory
from .booking_number_generator import (
    BookingNumberGenerator as BookingNumberGenerator,
)
