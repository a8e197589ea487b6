from .booking_id import BookingId as BookingId
from .booking_number import BookingNumber as BookingNumber
from .user_id import UserId as UserId
