from .exceptions import FlightNotFoundException as FlightNotFoundException
from .exceptions import InvalidFlightStateException as InvalidFlightStateException
from .exceptions import SeatNotFoundException as SeatNotFoundException
