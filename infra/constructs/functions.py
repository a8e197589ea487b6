from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

SERVICE_NAME = "flight-booking"


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        dependencies_layer: _lambda.LayerVersion,
        hold_duration_minutes: int = 15,
    ) -> None:
        super().__init__(scope, id)

        self._table = table
        self._layer = dependencies_layer
        self._hold_duration_minutes = hold_duration_minutes

        self.search_flights = self._create_function(
            "SearchFlightsLambda",
            "flight_booking.inventory.handlers.search_flights.lambda_handler",
        )
        self.reserve = self._create_function(
            "ReserveLambda",
            "flight_booking.reservation.handlers.reserve.lambda_handler",
        )
        self.get_booking = self._create_function(
            "GetBookingLambda",
            "flight_booking.reservation.handlers.get_booking.lambda_handler",
        )
        self.report_payment = self._create_function(
            "ReportPaymentLambda",
            "flight_booking.reservation.handlers.report_payment.lambda_handler",
        )
        self.cancel = self._create_function(
            "CancelBookingLambda",
            "flight_booking.reservation.handlers.cancel.lambda_handler",
        )
        self.sweep = self._create_function(
            "SweepExpiredHoldsLambda",
            "flight_booking.reservation.handlers.sweep.lambda_handler",
            timeout=Duration.minutes(5),
        )

        table.grant_read_data(self.search_flights)
        table.grant_read_data(self.get_booking)
        for fn in [self.reserve, self.report_payment, self.cancel, self.sweep]:
            table.grant_read_write_data(fn)

    def _create_function(
        self,
        id: str,
        handler: str,
        timeout: Duration = Duration.seconds(29),
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._layer],
            timeout=timeout,
            environment={
                "TABLE_NAME": self._table.table_name,
                "POWERTOOLS_SERVICE_NAME": SERVICE_NAME,
                "HOLD_DURATION_MINUTES": str(self._hold_duration_minutes),
            },
        )
