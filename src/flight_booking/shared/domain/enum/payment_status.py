from types import MappingProxyType

from .lifecycle_status import LifecycleStatus


class PaymentStatus(LifecycleStatus):
    """決済ステータス（予約の決済状態・決済試行の結果で共通）"""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"

    @classmethod
    def transitions(cls):
        return _TRANSITIONS


_TRANSITIONS = MappingProxyType(
    {
        PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
        PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
        PaymentStatus.FAILED: frozenset(),
        PaymentStatus.REFUNDED: frozenset(),
    }
)
