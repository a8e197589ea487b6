from aws_cdk import Duration
from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Schedule(Construct):
    """期限切れスイープの定期実行（EventBridge）"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        sweep: _lambda.Function,
        interval: Duration = Duration.minutes(1),
    ) -> None:
        super().__init__(scope, id)

        self.rule = events.Rule(
            self,
            "SweepExpiredHoldsRule",
            schedule=events.Schedule.rate(interval),
        )
        self.rule.add_target(targets.LambdaFunction(sweep, retry_attempts=0))
