from .reservation_saga import ReservationSaga as ReservationSaga
