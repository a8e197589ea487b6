from enum import Enum


class CancellationReason(str, Enum):
    """キャンセル理由"""

    USER_REQUEST = "USER_REQUEST"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    HOLD_EXPIRED = "HOLD_EXPIRED"
    RESERVATION_ABORTED = "RESERVATION_ABORTED"

    @property
    def finalizes_hold(self) -> bool:
        """決済待ちの仮押さえを終結させる理由かどうか

        決済失敗・期限切れによるキャンセルは、決済待ちの予約に対してだけ
        一度だけ成立する（確定済みの予約を取り消してはならない）。
        """
        return self is not CancellationReason.USER_REQUEST
