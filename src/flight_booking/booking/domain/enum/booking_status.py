from types import MappingProxyType

from flight_booking.shared.domain import LifecycleStatus


class BookingStatus(LifecycleStatus):
    """予約ステータス"""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    @classmethod
    def transitions(cls):
        return _TRANSITIONS


_TRANSITIONS = MappingProxyType(
    {
        BookingStatus.PENDING: frozenset(
            {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
        ),
        BookingStatus.CONFIRMED: frozenset(
            {BookingStatus.CANCELLED, BookingStatus.COMPLETED}
        ),
        BookingStatus.CANCELLED: frozenset(),
        BookingStatus.COMPLETED: frozenset(),
    }
)
