from abc import abstractmethod
from typing import Sequence

from flight_booking.booking.domain.entity import Booking, BookingSeat
from flight_booking.booking.domain.enum import BookingStatus
from flight_booking.booking.domain.value_object import BookingId, BookingNumber, UserId
from flight_booking.inventory.domain import FlightId
from flight_booking.shared.domain import IsoDateTime, PaymentStatus, Repository


class BookingRepository(Repository[Booking, BookingId]):
    """予約リポジトリのインターフェース

    検索系はコミット済みの状態のみを返し、呼び出しごとに新しいインスタンスを返す。
    """

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """予約を新規保存する

        予約番号の一意性も同じ書き込みで保証し、重複時は
        DuplicateResourceException を送出する。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_booking_number(self, booking_number: BookingNumber) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def exists_booking_number(self, booking_number: BookingNumber) -> bool:
        raise NotImplementedError

    @abstractmethod
    def find_by_user_id(
        self, user_id: UserId, status: BookingStatus | None = None
    ) -> list[Booking]:
        """利用者の予約（作成日時の新しい順）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_flight_id(self, flight_id: FlightId) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_by_payment_status(self, payment_status: PaymentStatus) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_created_between(
        self, start: IsoDateTime, end: IsoDateTime
    ) -> list[Booking]:
        """作成日時が [start, end] の予約（作成日時順）"""
        raise NotImplementedError

    @abstractmethod
    def find_expired_holds(self, now: IsoDateTime) -> list[Booking]:
        """決済待ちのまま仮押さえ期限を過ぎた予約"""
        raise NotImplementedError

    @abstractmethod
    def find_unreleased_cancellations(self) -> list[Booking]:
        """キャンセル済みで座席の関連が残っている予約"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_payment_status: PaymentStatus,
    ) -> None:
        """ステータスを条件付きで更新する

        保存済みの状態が expected_* と一致しない場合は OptimisticLockException。
        """
        raise NotImplementedError

    @abstractmethod
    def remove_booking_seats(self, seats: Sequence[BookingSeat]) -> None:
        """解放済みの座席の関連を削除する（存在しない関連は無視）"""
        raise NotImplementedError
