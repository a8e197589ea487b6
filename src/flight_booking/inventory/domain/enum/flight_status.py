from types import MappingProxyType

from flight_booking.shared.domain import LifecycleStatus


class FlightStatus(LifecycleStatus):
    """フライトステータス"""

    SCHEDULED = "SCHEDULED"
    BOARDING = "BOARDING"
    DEPARTED = "DEPARTED"
    ARRIVED = "ARRIVED"
    DELAYED = "DELAYED"
    CANCELLED = "CANCELLED"

    @classmethod
    def transitions(cls):
        return _TRANSITIONS

    @property
    def is_bookable(self) -> bool:
        """予約受付中かどうか（SCHEDULED のみ）"""
        return self is FlightStatus.SCHEDULED


# CANCELLED へは終端以外のすべての状態から遷移できる
_TRANSITIONS = MappingProxyType(
    {
        FlightStatus.SCHEDULED: frozenset(
            {FlightStatus.BOARDING, FlightStatus.DELAYED, FlightStatus.CANCELLED}
        ),
        FlightStatus.DELAYED: frozenset(
            {FlightStatus.SCHEDULED, FlightStatus.BOARDING, FlightStatus.CANCELLED}
        ),
        FlightStatus.BOARDING: frozenset(
            {FlightStatus.DEPARTED, FlightStatus.DELAYED, FlightStatus.CANCELLED}
        ),
        FlightStatus.DEPARTED: frozenset(
            {FlightStatus.ARRIVED, FlightStatus.CANCELLED}
        ),
        FlightStatus.ARRIVED: frozenset(),
        FlightStatus.CANCELLED: frozenset(),
    }
)
