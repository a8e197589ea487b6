from pydantic import BaseModel, Field


class SearchFlightsRequest(BaseModel):
    """フライト検索リクエスト（クエリ文字列）"""

    origin: str = Field(
        ...,
        pattern="^[A-Za-z]{3}$",
        description="出発空港コード（IATA）",
        examples=["HND"],
    )

    destination: str = Field(
        ...,
        pattern="^[A-Za-z]{3}$",
        description="到着空港コード（IATA）",
        examples=["CTS"],
    )

    departure_from: str = Field(
        ...,
        description="出発時刻の範囲（開始、ISO 8601形式）",
        examples=["2025-01-01T00:00:00"],
    )

    departure_to: str = Field(
        ...,
        description="出発時刻の範囲（終了、ISO 8601形式）",
        examples=["2025-01-01T23:59:59"],
    )
