import os
from typing import Sequence

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from flight_booking.booking.domain import (
    Booking,
    BookingId,
    BookingNumber,
    BookingRepository,
    BookingSeat,
    BookingStatus,
    UserId,
)
from flight_booking.booking.infrastructure.booking_item_mapper import (
    booking_seat_to_item,
    booking_to_item,
    item_to_booking,
)
from flight_booking.inventory.domain import FlightId
from flight_booking.shared.domain import IsoDateTime, PaymentStatus
from flight_booking.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)
from flight_booking.shared.infrastructure.dynamodb import query_all

# 作成日時の範囲検索用の固定パーティション
CREATED_AT_PARTITION = "BOOKINGS"


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    - 予約:         PK=BOOKING#<id>, SK=METADATA
    - 座席の関連:   PK=BOOKING#<id>, SK=SEAT#<flight_id>#<座席番号>
    - 予約番号:     PK=BOOKING_NUMBER#<番号>, SK=UNIQUE（一意性の保証用）
    - GSI1: 利用者 + 作成日時、GSI2: 予約ステータス + 仮押さえ期限
    - GSI3: フライト + 作成日時、GSI4: 決済ステータス + 作成日時
    - GSI5: 全予約 + 作成日時
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, booking: Booking) -> None:
        """予約・予約番号・座席の関連を1トランザクションで保存する"""
        metadata = {**self._booking_key(booking.id), **self._booking_indexes(booking)}
        metadata.update(booking_to_item(booking))
        transact_items = [
            self._put_new(metadata),
            self._put_new(
                {
                    **self._number_key(booking.booking_number),
                    "entity_type": "BOOKING_NUMBER",
                    "booking_id": str(booking.id),
                }
            ),
        ]
        transact_items.extend(
            self._put_new({**self._seat_key(seat), **booking_seat_to_item(seat)})
            for seat in booking.seats
        )

        try:
            self.dynamodb.meta.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                raise DuplicateResourceException(
                    f"Booking or booking number already exists: {booking.booking_number}"
                ) from e
            raise

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索（座席の関連を含む）"""
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking_id}"),
            ConsistentRead=True,
        )
        metadata = next((item for item in items if item["SK"] == "METADATA"), None)
        if metadata is None:
            return None
        seat_items = [item for item in items if item["SK"].startswith("SEAT#")]
        return item_to_booking(metadata, seat_items)

    def find_by_booking_number(self, booking_number: BookingNumber) -> Booking | None:
        response = self.table.get_item(
            Key=self._number_key(booking_number), ConsistentRead=True
        )
        item = response.get("Item")
        if not item:
            return None
        return self.find_by_id(BookingId(value=item["booking_id"]))

    def exists_booking_number(self, booking_number: BookingNumber) -> bool:
        response = self.table.get_item(
            Key=self._number_key(booking_number),
            ConsistentRead=True,
            ProjectionExpression="PK",
        )
        return "Item" in response

    def find_by_user_id(
        self, user_id: UserId, status: BookingStatus | None = None
    ) -> list[Booking]:
        """利用者の予約を作成日時の新しい順に取得する（GSI1）"""
        kwargs: dict = {
            "IndexName": "GSI1",
            "KeyConditionExpression": Key("GSI1PK").eq(f"USER#{user_id}"),
            "ScanIndexForward": False,
        }
        if status is not None:
            kwargs["FilterExpression"] = Attr("status").eq(status.value)
        return self._hydrate(query_all(self.table, **kwargs))

    def find_by_flight_id(self, flight_id: FlightId) -> list[Booking]:
        """フライトの予約を取得する（GSI3）"""
        return self._hydrate(
            query_all(
                self.table,
                IndexName="GSI3",
                KeyConditionExpression=Key("GSI3PK").eq(f"BOOKING_FLIGHT#{flight_id}"),
            )
        )

    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        """予約ステータスで検索（GSI2）"""
        return self._hydrate(
            query_all(
                self.table,
                IndexName="GSI2",
                KeyConditionExpression=Key("GSI2PK").eq(f"BOOKING_STATUS#{status.value}"),
            )
        )

    def find_by_payment_status(self, payment_status: PaymentStatus) -> list[Booking]:
        """決済ステータスで検索（GSI4）"""
        return self._hydrate(
            query_all(
                self.table,
                IndexName="GSI4",
                KeyConditionExpression=Key("GSI4PK").eq(
                    f"PAYMENT_STATUS#{payment_status.value}"
                ),
            )
        )

    def find_created_between(
        self, start: IsoDateTime, end: IsoDateTime
    ) -> list[Booking]:
        """作成日時の範囲で検索（GSI5）"""
        return self._hydrate(
            query_all(
                self.table,
                IndexName="GSI5",
                KeyConditionExpression=Key("GSI5PK").eq(CREATED_AT_PARTITION)
                & Key("GSI5SK").between(str(start), str(end)),
            )
        )

    def find_expired_holds(self, now: IsoDateTime) -> list[Booking]:
        """PENDING のうち仮押さえ期限が now 以前のもの（GSI2）"""
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(
                f"BOOKING_STATUS#{BookingStatus.PENDING.value}"
            )
            & Key("GSI2SK").lte(str(now)),
            FilterExpression=Attr("payment_status").eq(PaymentStatus.PENDING.value),
        )
        return [booking for booking in self._hydrate(items) if booking.is_hold_expired(now)]

    def find_unreleased_cancellations(self) -> list[Booking]:
        """CANCELLED のうち座席の関連が残っているもの（GSI2）"""
        bookings = self.find_by_status(BookingStatus.CANCELLED)
        return [booking for booking in bookings if booking.has_unreleased_seats]

    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_payment_status: PaymentStatus,
    ) -> None:
        """予約ステータス・決済ステータスを条件付きで更新する"""
        update_expression = (
            "SET #status = :status, payment_status = :payment_status,"
            " GSI2PK = :gsi2pk, GSI4PK = :gsi4pk"
        )
        values = {
            ":status": booking.status.value,
            ":payment_status": booking.payment_status.value,
            ":gsi2pk": f"BOOKING_STATUS#{booking.status.value}",
            ":gsi4pk": f"PAYMENT_STATUS#{booking.payment_status.value}",
        }
        if booking.cancellation_reason is not None:
            update_expression += ", cancellation_reason = :reason"
            values[":reason"] = booking.cancellation_reason.value

        try:
            self.table.update_item(
                Key=self._booking_key(booking.id),
                UpdateExpression=update_expression,
                ConditionExpression=Attr("status").eq(expected_status.value)
                & Attr("payment_status").eq(expected_payment_status.value),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status.value}/{expected_payment_status.value}, "
                    f"booking_id={booking.id}"
                )
            raise

    def remove_booking_seats(self, seats: Sequence[BookingSeat]) -> None:
        """座席の関連をまとめて削除する"""
        with self.table.batch_writer() as batch:
            for seat in seats:
                batch.delete_item(Key=self._seat_key(seat))

    def _hydrate(self, metadata_items: list[dict]) -> list[Booking]:
        """GSI で取得した予約アイテムに座席の関連を付けて復元する"""
        bookings = []
        for item in metadata_items:
            seat_items = query_all(
                self.table,
                KeyConditionExpression=Key("PK").eq(f"BOOKING#{item['booking_id']}")
                & Key("SK").begins_with("SEAT#"),
                ConsistentRead=True,
            )
            bookings.append(item_to_booking(item, seat_items))
        return bookings

    def _put_new(self, item: dict) -> dict:
        return {
            "Put": {
                "TableName": self.table_name,
                "Item": item,
                "ConditionExpression": "attribute_not_exists(PK)",
            }
        }

    @staticmethod
    def _booking_key(booking_id: BookingId) -> dict:
        return {"PK": f"BOOKING#{booking_id}", "SK": "METADATA"}

    @staticmethod
    def _number_key(booking_number: BookingNumber) -> dict:
        return {"PK": f"BOOKING_NUMBER#{booking_number}", "SK": "UNIQUE"}

    @staticmethod
    def _seat_key(seat: BookingSeat) -> dict:
        return {
            "PK": f"BOOKING#{seat.booking_id}",
            "SK": f"SEAT#{seat.flight_id}#{seat.seat_id}",
        }

    @staticmethod
    def _booking_indexes(booking: Booking) -> dict:
        created_at = str(booking.created_at)
        return {
            "GSI1PK": f"USER#{booking.user_id}",
            "GSI1SK": created_at,
            "GSI2PK": f"BOOKING_STATUS#{booking.status.value}",
            "GSI2SK": str(booking.hold_expires_at),
            "GSI3PK": f"BOOKING_FLIGHT#{booking.flight_id}",
            "GSI3SK": created_at,
            "GSI4PK": f"PAYMENT_STATUS#{booking.payment_status.value}",
            "GSI4SK": created_at,
            "GSI5PK": CREATED_AT_PARTITION,
            "GSI5SK": created_at,
        }
