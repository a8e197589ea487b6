from flight_booking.shared.domain import (
    ConflictException,
    InvalidStateException,
    ResourceNotFoundException,
)


class BookingNotFoundException(ResourceNotFoundException):
    """予約が存在しない場合"""

    pass


class AlreadyTerminalException(InvalidStateException):
    """CANCELLED / COMPLETED の予約を操作しようとした場合"""

    pass


class AlreadyFinalizedException(ConflictException):
    """決済待ちの予約が既に確定または解放されていた場合（終結処理の競合の敗者）"""

    pass


class BookingNumberExhaustedException(ConflictException):
    """予約番号の生成が再試行上限まで衝突した場合"""

    pass
