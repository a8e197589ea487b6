from typing import Iterable

from flight_booking.booking.domain.entity.booking_seat import BookingSeat
from flight_booking.booking.domain.enum import BookingStatus, CancellationReason
from flight_booking.booking.domain.exception import AlreadyTerminalException
from flight_booking.booking.domain.value_object import BookingId, BookingNumber, UserId
from flight_booking.inventory.domain import FlightId, HoldId, SeatId
from flight_booking.shared.domain import (
    AggregateRoot,
    InvalidStateException,
    IsoDateTime,
    Money,
    PaymentStatus,
    ValidationException,
)


class Booking(AggregateRoot[BookingId]):
    """フライト予約

    予約ステータスと決済ステータスはそれぞれの遷移表に従ってのみ変化する。
    CONFIRMED へは決済ステータスが PAID のときだけ遷移できる。
    hold_id は座席在庫側の確保IDで、座席の解放はこの値を条件に行う。
    """

    def __init__(
        self,
        id: BookingId,
        booking_number: BookingNumber,
        user_id: UserId,
        flight_id: FlightId,
        passenger_count: int,
        seat_ids: Iterable[SeatId],
        total_price: Money,
        hold_id: HoldId,
        created_at: IsoDateTime,
        hold_expires_at: IsoDateTime,
        status: BookingStatus = BookingStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        cancellation_reason: CancellationReason | None = None,
    ) -> None:
        super().__init__(id)

        self._booking_number = booking_number
        self._user_id = user_id
        self._flight_id = flight_id
        self._passenger_count = passenger_count
        self._seats = tuple(
            BookingSeat(booking_id=id, flight_id=flight_id, seat_id=seat_id)
            for seat_id in sorted(set(seat_ids))
        )
        self._total_price = total_price
        self._hold_id = hold_id
        self._created_at = created_at
        self._hold_expires_at = hold_expires_at
        self._status = status
        self._payment_status = payment_status
        self._cancellation_reason = cancellation_reason

        self._validate()

    def _validate(self) -> None:
        if self._passenger_count <= 0:
            raise ValidationException(
                f"Passenger count must be positive: {self._passenger_count}"
            )
        # 解放が済むと座席の関連は減る
        if len(self._seats) > self._passenger_count:
            raise ValidationException(
                f"Booking holds {len(self._seats)} seats"
                f" for {self._passenger_count} passengers"
            )
        if self._hold_expires_at.is_before(self._created_at):
            raise ValidationException("Hold expiry must not precede creation time")

    @property
    def booking_number(self) -> BookingNumber:
        return self._booking_number

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def passenger_count(self) -> int:
        return self._passenger_count

    @property
    def seats(self) -> tuple[BookingSeat, ...]:
        return self._seats

    @property
    def seat_ids(self) -> tuple[SeatId, ...]:
        return tuple(seat.seat_id for seat in self._seats)

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def hold_id(self) -> HoldId:
        return self._hold_id

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def hold_expires_at(self) -> IsoDateTime:
        return self._hold_expires_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def payment_status(self) -> PaymentStatus:
        return self._payment_status

    @property
    def cancellation_reason(self) -> CancellationReason | None:
        return self._cancellation_reason

    @property
    def is_awaiting_payment(self) -> bool:
        """決済待ち（PENDING / PENDING）かどうか"""
        return (
            self._status is BookingStatus.PENDING
            and self._payment_status is PaymentStatus.PENDING
        )

    def is_hold_expired(self, now: IsoDateTime) -> bool:
        """決済待ちのまま仮押さえ期限を過ぎたかどうか"""
        return self.is_awaiting_payment and not now.is_before(self._hold_expires_at)

    @property
    def has_unreleased_seats(self) -> bool:
        """キャンセル済みなのに座席の解放が終わっていないかどうか"""
        return self._status is BookingStatus.CANCELLED and bool(self._seats)

    def mark_paid(self) -> None:
        """決済成功を反映する"""
        self._transition_payment_to(PaymentStatus.PAID)

    def mark_payment_failed(self) -> None:
        """決済失敗を反映する"""
        self._transition_payment_to(PaymentStatus.FAILED)

    def mark_refunded(self) -> None:
        """返金を反映する（座席には影響しない）"""
        self._transition_payment_to(PaymentStatus.REFUNDED)

    def confirm(self) -> None:
        """予約を確定する（決済済みであること）"""
        self.transition_to(BookingStatus.CONFIRMED)

    def cancel(self, reason: CancellationReason = CancellationReason.USER_REQUEST) -> None:
        """予約をキャンセルする（座席の関連は解放完了まで残る）"""
        if self._status.is_terminal:
            raise AlreadyTerminalException(
                f"Booking {self._booking_number} is already {self._status.value}"
            )
        self.transition_to(BookingStatus.CANCELLED)
        self._cancellation_reason = reason

    def complete(self) -> None:
        """搭乗済みとして完了にする"""
        self.transition_to(BookingStatus.COMPLETED)

    def detach_seats(self) -> tuple[BookingSeat, ...]:
        """座席の解放後に関連を外し、外した関連を返す"""
        if self._status is not BookingStatus.CANCELLED:
            raise InvalidStateException(
                f"Seats of booking {self._booking_number} are still held"
                f" (status={self._status.value})"
            )
        detached, self._seats = self._seats, ()
        return detached

    def transition_to(self, target: BookingStatus) -> None:
        """予約ステータスを遷移させる（遷移表にない遷移は例外）"""
        self._status.ensure_can_transition_to(target)
        if (
            target is BookingStatus.CONFIRMED
            and self._payment_status is not PaymentStatus.PAID
        ):
            raise InvalidStateException(
                f"Cannot confirm booking {self._booking_number} before payment"
                f" (payment_status={self._payment_status.value})"
            )
        self._status = target

    def _transition_payment_to(self, target: PaymentStatus) -> None:
        self._payment_status.ensure_can_transition_to(target)
        self._payment_status = target
