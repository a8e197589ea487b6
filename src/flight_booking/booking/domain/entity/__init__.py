from .booking import Booking as Booking
from .booking_seat import BookingSeat as BookingSeat
