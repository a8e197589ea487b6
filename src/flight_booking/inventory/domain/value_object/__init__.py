from .flight_id import FlightId as FlightId
from .flight_number import FlightNumber as FlightNumber
from .hold_id import HoldId as HoldId
from .route import AirportCode as AirportCode
from .route import Route as Route
from .seat_hold import SeatHold as SeatHold
from .seat_id import SeatId as SeatId
