from .exceptions import AlreadyFinalizedException as AlreadyFinalizedException
from .exceptions import AlreadyTerminalException as AlreadyTerminalException
from .exceptions import BookingNotFoundException as BookingNotFoundException
from .exceptions import (
    BookingNumberExhaustedException as BookingNumberExhaustedException,
)
