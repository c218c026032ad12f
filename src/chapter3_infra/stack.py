"""
AWS CDK Stack for the Chapter 3 application.

Creates all AWS resources for the three-tier web app:
- DynamoDB table for application data
- S3 website bucket holding the front-end build
- ECS service behind a load balancer hosting the back-end
"""

from aws_cdk import Stack
from constructs import Construct

from chapter3_infra.compute import BackendServiceConstruct
from chapter3_infra.config import Settings, get_settings
from chapter3_infra.database import TableConstruct
from chapter3_infra.storage import WebsiteConstruct


class Chapter3Stack(Stack):
    """
    CDK Stack for the Chapter 3 application.

    The table is declared first so the backend can be handed a reference
    to it and grant its task role access.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        settings: Settings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        settings = settings or get_settings()

        self.dynamodb = TableConstruct(self, "Dynamodb", settings=settings.table)

        self.s3 = WebsiteConstruct(self, "S3", settings=settings.web)

        self.ecs = BackendServiceConstruct(
            self,
            "ECS",
            dynamodb=self.dynamodb,
            settings=settings.service,
        )
