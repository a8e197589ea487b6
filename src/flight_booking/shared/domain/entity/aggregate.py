from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """集約ルート（Flight / Booking / Payment）

    リポジトリの読み書きは集約単位で行い、座席（Seat）や予約座席（BookingSeat）は
    集約ルートを通してのみ変更する。集約をまたぐ参照は FlightId・BookingId などの
    ID で持つ。
    """
