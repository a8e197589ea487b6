import secrets
import string
import threading
import time
from typing import Callable

from flight_booking.booking.domain.value_object import BookingNumber

SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 6


def _random_suffix() -> str:
    return "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))


class BookingNumberGenerator:
    """予約番号の生成器

    タイムスタンプ部はプロセス内で単調増加させる（同一ミリ秒内や時計の巻き戻りでは
    直前の値 + 1 を使う）。一意性の最終確認はリポジトリ側で行う。
    """

    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        suffix: Callable[[], str] = _random_suffix,
    ) -> None:
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._suffix = suffix
        self._last_millis = 0
        self._lock = threading.Lock()

    def next(self) -> BookingNumber:
        with self._lock:
            millis = max(self._clock(), self._last_millis + 1)
            self._last_millis = millis
        return BookingNumber(f"BK{millis:013d}{self._suffix()}")
