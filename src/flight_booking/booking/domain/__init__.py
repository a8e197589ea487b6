from .entity import Booking as Booking
from .entity import BookingSeat as BookingSeat
from .enum import BookingStatus as BookingStatus
from .enum import CancellationReason as CancellationReason
from .exception import AlreadyFinalizedException as AlreadyFinalizedException
from .exception import AlreadyTerminalException as AlreadyTerminalException
from .exception import BookingNotFoundException as BookingNotFoundException
from .exception import (
    BookingNumberExhaustedException as BookingNumberExhaustedException,
)
from .factory import BookingFactory as BookingFactory
from .factory import BookingNumberGenerator as BookingNumberGenerator
from .repository import BookingRepository as BookingRepository
from .value_object import BookingId as BookingId
from .value_object import BookingNumber as BookingNumber
from .value_object import UserId as UserId
