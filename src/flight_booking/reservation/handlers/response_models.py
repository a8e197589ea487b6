from pydantic import BaseModel

from flight_booking.reservation.domain import (
    BookingDetail,
    PaymentAcknowledgement,
    ReservationResult,
    SweepReport,
)


class ReservationData(BaseModel):
    booking_number: str
    flight_id: str
    seat_ids: list[str]
    total_amount: str
    currency: str
    hold_expires_at: str


class PaymentData(BaseModel):
    transaction_id: str
    status: str
    recorded_at: str


class BookingData(BaseModel):
    """予約照会のレスポンスモデル"""

    booking_number: str
    user_id: str
    flight_id: str
    passenger_count: int
    seat_ids: list[str]
    total_amount: str
    currency: str
    status: str
    payment_status: str
    reservation_state: str
    created_at: str
    hold_expires_at: str
    payments: list[PaymentData]


class AcknowledgementData(BaseModel):
    acknowledged: bool = True
    already_finalized: bool
    booking_number: str
    transaction_id: str
    outcome: str
    booking_status: str
    payment_status: str


class SweepData(BaseModel):
    released: list[str]
    already_finalized: list[str]
    repaired: list[str]
    failed: dict[str, str]


class ReservationResponse(BaseModel):
    status: str = "success"
    data: ReservationData


class BookingResponse(BaseModel):
    status: str = "success"
    data: BookingData


class AcknowledgementResponse(BaseModel):
    status: str = "success"
    data: AcknowledgementData


def to_reservation_response(result: ReservationResult) -> dict:
    return ReservationResponse(
        data=ReservationData(
            booking_number=str(result.booking_number),
            flight_id=str(result.flight_id),
            seat_ids=[str(seat_id) for seat_id in result.seat_ids],
            total_amount=str(result.total_price.amount),
            currency=str(result.total_price.currency),
            hold_expires_at=str(result.hold_expires_at),
        )
    ).model_dump()


def to_booking_response(detail: BookingDetail) -> dict:
    return BookingResponse(
        data=BookingData(
            booking_number=str(detail.booking_number),
            user_id=str(detail.user_id),
            flight_id=str(detail.flight_id),
            passenger_count=detail.passenger_count,
            seat_ids=[str(seat_id) for seat_id in detail.seat_ids],
            total_amount=str(detail.total_price.amount),
            currency=str(detail.total_price.currency),
            status=detail.status.value,
            payment_status=detail.payment_status.value,
            reservation_state=detail.reservation_state.value,
            created_at=str(detail.created_at),
            hold_expires_at=str(detail.hold_expires_at),
            payments=[
                PaymentData(
                    transaction_id=payment.transaction_id,
                    status=payment.status.value,
                    recorded_at=str(payment.recorded_at),
                )
                for payment in detail.payments
            ],
        )
    ).model_dump()


def to_acknowledgement_response(ack: PaymentAcknowledgement) -> dict:
    """決済結果の受領応答（確定済みの予約への報告も 200 で返す）"""
    return AcknowledgementResponse(
        data=AcknowledgementData(
            already_finalized=ack.already_finalized,
            booking_number=str(ack.booking_number),
            transaction_id=str(ack.transaction_id),
            outcome=ack.outcome.value,
            booking_status=ack.booking_status.value,
            payment_status=ack.payment_status.value,
        )
    ).model_dump()


def to_sweep_response(report: SweepReport) -> dict:
    return SweepData(
        released=[str(number) for number in report.released],
        already_finalized=[str(number) for number in report.already_finalized],
        repaired=[str(number) for number in report.repaired],
        failed={str(number): message for number, message in report.failed.items()},
    ).model_dump()
