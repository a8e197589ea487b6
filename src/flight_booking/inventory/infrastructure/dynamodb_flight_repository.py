import os
from typing import Sequence

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from flight_booking.inventory.domain import (
    Flight,
    FlightId,
    FlightRepository,
    FlightStatus,
    HoldId,
    Route,
    Seat,
    SeatClass,
    SeatStatus,
)
from flight_booking.inventory.infrastructure.flight_item_mapper import (
    flight_to_item,
    item_to_flight,
    item_to_seat,
    seat_to_item,
)
from flight_booking.shared.domain import IsoDateTime, ValidationException
from flight_booking.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    OptimisticLockException,
)
from flight_booking.shared.infrastructure.dynamodb import query_all

# TransactWriteItems の上限（フライト本体の1件を含む）
MAX_TRANSACTION_ITEMS = 100


class DynamoDBFlightRepository(FlightRepository):
    """DynamoDBを使用したFlightRepository の具象実装

    - フライト: PK=FLIGHT#<id>, SK=METADATA
    - 座席:     PK=FLIGHT#<id>, SK=SEAT#<座席番号>
    - GSI1: 路線 + 出発時刻、GSI2: フライトステータス + 出発時刻
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, flight: Flight) -> None:
        """フライトをDBに保存する"""
        item = {**self._flight_key(flight.id), **self._flight_indexes(flight)}
        item.update(flight_to_item(flight))
        self._put_new(item, f"Flight already exists: {flight.id}")

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索"""
        response = self.table.get_item(Key=self._flight_key(flight_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return item_to_flight(item)

    def save_seats(self, seats: Sequence[Seat]) -> None:
        """座席をDBに保存する"""
        for seat in seats:
            item = {**self._seat_key(seat), **seat_to_item(seat)}
            self._put_new(item, f"Seat already exists: {seat.flight_id}/{seat.id}")

    def find_seats(
        self, flight_id: FlightId, seat_class: SeatClass | None = None
    ) -> list[Seat]:
        """フライトの座席を座席番号順に取得する"""
        kwargs: dict = {
            "KeyConditionExpression": Key("PK").eq(f"FLIGHT#{flight_id}")
            & Key("SK").begins_with("SEAT#"),
            "ConsistentRead": True,
        }
        if seat_class is not None:
            kwargs["FilterExpression"] = Attr("seat_class").eq(seat_class.value)

        seats = [item_to_seat(item) for item in query_all(self.table, **kwargs)]
        return sorted(seats, key=lambda seat: seat.id)

    def search_by_route(
        self, route: Route, departure_from: IsoDateTime, departure_to: IsoDateTime
    ) -> list[Flight]:
        """路線と出発時刻の範囲で検索する（GSI1）"""
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(self._route_key(route))
            & Key("GSI1SK").between(str(departure_from), str(departure_to)),
        )
        return [item_to_flight(item) for item in items]

    def find_by_status(self, status: FlightStatus) -> list[Flight]:
        """ステータスで検索する（GSI2）"""
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(f"FLIGHT_STATUS#{status.value}"),
        )
        return [item_to_flight(item) for item in items]

    def commit_seat_allocation(self, flight: Flight, seats: Sequence[Seat]) -> None:
        """空席数の減算と座席の AVAILABLE -> OCCUPIED を1トランザクションで反映する"""
        count = len(seats)
        transact_items = [
            {
                "Update": {
                    "TableName": self.table_name,
                    "Key": self._flight_key(flight.id),
                    "UpdateExpression": "SET available_seats = available_seats - :count",
                    "ConditionExpression": (
                        "#status = :bookable AND available_seats >= :count"
                    ),
                    "ExpressionAttributeNames": {"#status": "status"},
                    "ExpressionAttributeValues": {
                        ":count": count,
                        ":bookable": FlightStatus.SCHEDULED.value,
                    },
                }
            }
        ]
        transact_items.extend(self._seat_occupy(seat) for seat in seats)
        self._transact(transact_items, f"Seat allocation conflict: flight_id={flight.id}")

    def commit_seat_release(
        self, flight: Flight, seats: Sequence[Seat], hold_id: HoldId
    ) -> None:
        """空席数の加算と hold_id で確保された座席の解放を1トランザクションで反映する"""
        count = len(seats)
        transact_items = [
            {
                "Update": {
                    "TableName": self.table_name,
                    "Key": self._flight_key(flight.id),
                    "UpdateExpression": "SET available_seats = available_seats + :count",
                    "ConditionExpression": "available_seats <= :max_before",
                    "ExpressionAttributeValues": {
                        ":count": count,
                        ":max_before": flight.total_seats - count,
                    },
                }
            }
        ]
        transact_items.extend(self._seat_release(seat, hold_id) for seat in seats)
        self._transact(transact_items, f"Seat release conflict: flight_id={flight.id}")

    def update_status(self, flight: Flight, expected_status: FlightStatus) -> None:
        """フライトのステータスを更新する"""
        try:
            self.table.update_item(
                Key=self._flight_key(flight.id),
                UpdateExpression="SET #status = :status, GSI2PK = :gsi2pk",
                ConditionExpression=Attr("status").eq(expected_status.value),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":status": flight.status.value,
                    ":gsi2pk": f"FLIGHT_STATUS#{flight.status.value}",
                },
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Flight status conflict: "
                    f"expected {expected_status}, "
                    f"flight_id={flight.id}"
                )
            raise

    def update_seat(self, seat: Seat, expected_status: SeatStatus) -> None:
        """座席のステータスを更新する"""
        try:
            self.table.update_item(
                Key=self._seat_key(seat),
                UpdateExpression="SET #status = :status",
                ConditionExpression=Attr("status").eq(expected_status.value),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={":status": seat.status.value},
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Seat status conflict: "
                    f"expected {expected_status}, "
                    f"seat={seat.flight_id}/{seat.id}"
                )
            raise

    def _seat_occupy(self, seat: Seat) -> dict:
        return {
            "Update": {
                "TableName": self.table_name,
                "Key": self._seat_key(seat),
                "UpdateExpression": "SET #status = :occupied, held_by = :hold",
                "ConditionExpression": "#status = :available",
                "ExpressionAttributeNames": {"#status": "status"},
                "ExpressionAttributeValues": {
                    ":available": SeatStatus.AVAILABLE.value,
                    ":occupied": SeatStatus.OCCUPIED.value,
                    ":hold": str(seat.held_by),
                },
            }
        }

    def _seat_release(self, seat: Seat, hold_id: HoldId) -> dict:
        return {
            "Update": {
                "TableName": self.table_name,
                "Key": self._seat_key(seat),
                "UpdateExpression": "SET #status = :available REMOVE held_by",
                "ConditionExpression": "#status = :occupied AND held_by = :hold",
                "ExpressionAttributeNames": {"#status": "status"},
                "ExpressionAttributeValues": {
                    ":available": SeatStatus.AVAILABLE.value,
                    ":occupied": SeatStatus.OCCUPIED.value,
                    ":hold": str(hold_id),
                },
            }
        }

    def _transact(self, transact_items: list[dict], conflict_message: str) -> None:
        if len(transact_items) > MAX_TRANSACTION_ITEMS:
            raise ValidationException(
                f"Too many seats in one request: {len(transact_items) - 1}"
            )
        try:
            # resource 経由のクライアントは Python の型をそのまま受け付ける
            self.dynamodb.meta.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                raise OptimisticLockException(conflict_message) from e
            raise

    def _put_new(self, item: dict, duplicate_message: str) -> None:
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(duplicate_message)
            raise

    @staticmethod
    def _flight_key(flight_id: FlightId) -> dict:
        return {"PK": f"FLIGHT#{flight_id}", "SK": "METADATA"}

    @staticmethod
    def _seat_key(seat: Seat) -> dict:
        return {"PK": f"FLIGHT#{seat.flight_id}", "SK": f"SEAT#{seat.id}"}

    @staticmethod
    def _route_key(route: Route) -> str:
        return f"ROUTE#{route.origin}#{route.destination}"

    def _flight_indexes(self, flight: Flight) -> dict:
        return {
            "GSI1PK": self._route_key(flight.route),
            "GSI1SK": str(flight.departure_time),
            "GSI2PK": f"FLIGHT_STATUS#{flight.status.value}",
            "GSI2SK": str(flight.departure_time),
        }
