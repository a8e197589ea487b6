from aws_cdk import aws_apigateway as apigw
from constructs import Construct

from infra.constructs.functions import Functions


class Api(Construct):
    """API Gateway Construct"""

    def __init__(self, scope: Construct, id: str, functions: Functions) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "FlightBookingRestApi",
            rest_api_name="Flight Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=50,
                throttling_rate_limit=20,
            ),
        )

        # GET /flights
        flights = self.rest_api.root.add_resource("flights")
        flights.add_method("GET", apigw.LambdaIntegration(functions.search_flights))

        # POST /bookings
        bookings = self.rest_api.root.add_resource("bookings")
        bookings.add_method("POST", apigw.LambdaIntegration(functions.reserve))

        # GET /bookings/{booking_number}
        booking = bookings.add_resource("{booking_number}")
        booking.add_method("GET", apigw.LambdaIntegration(functions.get_booking))

        # POST /bookings/{booking_number}/payments
        booking.add_resource("payments").add_method(
            "POST", apigw.LambdaIntegration(functions.report_payment)
        )

        # POST /bookings/{booking_number}/cancel
        booking.add_resource("cancel").add_method(
            "POST", apigw.LambdaIntegration(functions.cancel)
        )
