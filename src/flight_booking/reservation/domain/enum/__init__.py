from .reservation_state import ReservationState as ReservationState
