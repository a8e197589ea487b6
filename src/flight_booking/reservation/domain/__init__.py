from .entity import ReservationSaga as ReservationSaga
from .enum import ReservationState as ReservationState
from .value_object import BookingDetail as BookingDetail
from .value_object import PaymentAcknowledgement as PaymentAcknowledgement
from .value_object import PaymentRecord as PaymentRecord
from .value_object import ReservationResult as ReservationResult
from .value_object import SweepReport as SweepReport
