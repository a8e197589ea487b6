from aws_cdk import CfnOutput, Stack
from constructs import Construct

from infra.constructs import Api, Database, Functions, Layers, Schedule


class FlightBookingStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            dependencies_layer=layers.dependencies_layer,
        )

        api = Api(self, "Api", functions=fns)

        Schedule(self, "Schedule", sweep=fns.sweep)

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
        CfnOutput(self, "TableName", value=database.table.table_name)
