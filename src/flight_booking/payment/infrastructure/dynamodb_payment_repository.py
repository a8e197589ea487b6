import os

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from flight_booking.booking.domain import BookingId
from flight_booking.payment.domain import (
    DuplicateTransactionException,
    Payment,
    PaymentId,
    PaymentRepository,
    TransactionId,
)
from flight_booking.payment.infrastructure.payment_item_mapper import (
    item_to_payment,
    payment_to_item,
)
from flight_booking.shared.domain import PaymentStatus
from flight_booking.shared.infrastructure.dynamodb import query_all


class DynamoDBPaymentRepository(PaymentRepository):
    """DynamoDBを使用したPaymentRepository の具象実装

    - 決済記録: PK=BOOKING#<booking_id>, SK=PAYMENT#<payment_id>
    - 取引ID:   PK=TRANSACTION#<transaction_id>, SK=UNIQUE（一意性の保証用）
    - GSI2: 決済記録ステータス + 記録日時、GSI3: 決済記録ID
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, payment: Payment) -> None:
        """決済記録と取引IDの一意性アイテムを1トランザクションで保存する"""
        item = {
            "PK": f"BOOKING#{payment.booking_id}",
            "SK": f"PAYMENT#{payment.id}",
            "GSI2PK": f"PAYMENT_RECORD_STATUS#{payment.status.value}",
            "GSI2SK": str(payment.recorded_at),
            "GSI3PK": f"PAYMENT#{payment.id}",
            "GSI3SK": str(payment.recorded_at),
            **payment_to_item(payment),
        }
        guard = {
            **self._transaction_key(payment.transaction_id),
            "entity_type": "TRANSACTION",
            "booking_id": str(payment.booking_id),
            "payment_id": str(payment.id),
        }
        try:
            self.dynamodb.meta.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": guard,
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": item,
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                ]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                raise DuplicateTransactionException(
                    f"Transaction already recorded: {payment.transaction_id}"
                ) from e
            raise

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済記録IDで検索（GSI3）"""
        response = self.table.query(
            IndexName="GSI3",
            KeyConditionExpression=Key("GSI3PK").eq(f"PAYMENT#{payment_id}"),
        )
        items = response.get("Items", [])
        return item_to_payment(items[0]) if items else None

    def find_by_transaction_id(self, transaction_id: TransactionId) -> Payment | None:
        response = self.table.get_item(
            Key=self._transaction_key(transaction_id), ConsistentRead=True
        )
        guard = response.get("Item")
        if not guard:
            return None

        response = self.table.get_item(
            Key={
                "PK": f"BOOKING#{guard['booking_id']}",
                "SK": f"PAYMENT#{guard['payment_id']}",
            },
            ConsistentRead=True,
        )
        item = response.get("Item")
        return item_to_payment(item) if item else None

    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking_id}")
            & Key("SK").begins_with("PAYMENT#"),
            ConsistentRead=True,
        )
        return sorted(map(item_to_payment, items), key=lambda p: p.recorded_at)

    def find_by_status(self, status: PaymentStatus) -> list[Payment]:
        """決済記録ステータスで検索（GSI2）"""
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(
                f"PAYMENT_RECORD_STATUS#{status.value}"
            ),
        )
        return [item_to_payment(item) for item in items]

    @staticmethod
    def _transaction_key(transaction_id: TransactionId) -> dict:
        return {"PK": f"TRANSACTION#{transaction_id}", "SK": "UNIQUE"}
