from types import MappingProxyType

from flight_booking.shared.domain import LifecycleStatus


class SeatStatus(LifecycleStatus):
    """座席ステータス

    AVAILABLE と OCCUPIED は相互に遷移できる。MAINTENANCE は戻らない。
    """

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"

    @classmethod
    def transitions(cls):
        return _TRANSITIONS


_TRANSITIONS = MappingProxyType(
    {
        SeatStatus.AVAILABLE: frozenset({SeatStatus.OCCUPIED, SeatStatus.MAINTENANCE}),
        SeatStatus.OCCUPIED: frozenset({SeatStatus.AVAILABLE}),
        SeatStatus.MAINTENANCE: frozenset(),
    }
)
