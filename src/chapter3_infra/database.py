"""
DynamoDB table construct.

Declares the single table the backend reads and writes:
- Composite key (partition + sort), both string-typed
- On-demand billing unless provisioned capacity is configured
- Deleted together with the stack
"""

from aws_cdk import (
    RemovalPolicy,
    aws_dynamodb as dynamodb,
)
from constructs import Construct

from chapter3_infra.config import TableSettings


class TableConstruct(Construct):
    """
    Construct that creates the main DynamoDB table.

    Attributes:
        main_table: The DynamoDB table
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        settings: TableSettings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        settings = settings or TableSettings()

        capacity = {}
        if settings.billing_mode == "PROVISIONED":
            capacity = {
                "read_capacity": settings.read_capacity,
                "write_capacity": settings.write_capacity,
            }

        # Key schema is immutable once the table exists
        self.main_table = dynamodb.Table(
            self,
            "MainTable",
            table_name=settings.table_name,
            partition_key=dynamodb.Attribute(
                name=settings.partition_key,
                type=dynamodb.AttributeType.STRING,
            ),
            sort_key=dynamodb.Attribute(
                name=settings.sort_key,
                type=dynamodb.AttributeType.STRING,
            ),
            billing_mode=dynamodb.BillingMode[settings.billing_mode],
            removal_policy=RemovalPolicy.DESTROY,
            **capacity,
        )
