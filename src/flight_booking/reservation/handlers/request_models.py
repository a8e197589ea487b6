from pydantic import BaseModel, Field, field_validator

from flight_booking.shared.domain import PaymentStatus


class ReserveRequest(BaseModel):
    """座席予約リクエスト（POST /bookings）"""

    user_id: str = Field(
        ...,
        min_length=1,
        description="利用者ID（認証基盤が払い出す識別子）",
        examples=["user-123"],
    )

    flight_id: str = Field(
        ...,
        min_length=1,
        description="フライトID",
        examples=["flight-001"],
    )

    seat_class: str = Field(
        default="ECONOMY",
        description="座席クラス",
        examples=["ECONOMY", "BUSINESS", "FIRST"],
    )

    passenger_count: int = Field(..., gt=0, description="搭乗者数", examples=[2])

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-123",
                    "flight_id": "flight-001",
                    "seat_class": "ECONOMY",
                    "passenger_count": 2,
                }
            ]
        }
    }


class ReportPaymentRequest(BaseModel):
    """決済結果の報告（POST /bookings/{booking_number}/payments）"""

    transaction_id: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="決済ゲートウェイの取引ID",
        examples=["tx-0001"],
    )

    outcome: PaymentStatus = Field(
        ...,
        description="決済結果",
        examples=["PAID", "FAILED", "REFUNDED"],
    )

    @field_validator("outcome", mode="before")
    @classmethod
    def normalize_outcome(cls, v):
        """大文字に揃える"""
        return v.upper() if isinstance(v, str) else v


class CancelBookingRequest(BaseModel):
    """予約キャンセル（POST /bookings/{booking_number}/cancel）"""

    requester_id: str = Field(
        ...,
        min_length=1,
        description="キャンセルを依頼した利用者ID",
        examples=["user-123"],
    )
