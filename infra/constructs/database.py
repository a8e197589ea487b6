from aws_cdk import RemovalPolicy
from aws_cdk import aws_dynamodb as dynamodb
from constructs import Construct

# フライト・予約・決済記録で共有するインデックス数
GSI_COUNT = 5


class Database(Construct):
    """DynamoDB Construct（シングルテーブル）"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.table = dynamodb.Table(
            self,
            "FlightBookingTable",
            partition_key=dynamodb.Attribute(
                name="PK", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name="SK", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery_specification=dynamodb.PointInTimeRecoverySpecification(
                point_in_time_recovery_enabled=True
            ),
            removal_policy=RemovalPolicy.RETAIN,
        )

        for number in range(1, GSI_COUNT + 1):
            self.table.add_global_secondary_index(
                index_name=f"GSI{number}",
                partition_key=dynamodb.Attribute(
                    name=f"GSI{number}PK", type=dynamodb.AttributeType.STRING
                ),
                sort_key=dynamodb.Attribute(
                    name=f"GSI{number}SK", type=dynamodb.AttributeType.STRING
                ),
            )
