from .booking_detail import BookingDetail as BookingDetail
from .booking_detail import PaymentRecord as PaymentRecord
from .payment_acknowledgement import PaymentAcknowledgement as PaymentAcknowledgement
from .reservation_result import ReservationResult as ReservationResult
from .sweep_report import SweepReport as SweepReport
