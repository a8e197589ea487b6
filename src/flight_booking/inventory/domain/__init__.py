from .entity import Flight as Flight
from .entity import Seat as Seat
from .enum import FlightStatus as FlightStatus
from .enum import SeatClass as SeatClass
from .enum import SeatStatus as SeatStatus
from .exception import FlightNotFoundException as FlightNotFoundException
from .exception import InvalidFlightStateException as InvalidFlightStateException
from .exception import SeatNotFoundException as SeatNotFoundException
from .repository import FlightRepository as FlightRepository
from .value_object import AirportCode as AirportCode
from .value_object import FlightId as FlightId
from .value_object import FlightNumber as FlightNumber
from .value_object import HoldId as HoldId
from .value_object import Route as Route
from .value_object import SeatHold as SeatHold
from .value_object import SeatId as SeatId
