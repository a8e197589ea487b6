from .flight_status import FlightStatus as FlightStatus
from .seat_class import SeatClass as SeatClass
from .seat_status import SeatStatus as SeatStatus
