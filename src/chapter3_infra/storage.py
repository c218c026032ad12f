"""
S3 static website construct.

The front-end is a browser-rendered single-page app, so a public S3 bucket
configured for website hosting is enough to serve it. The build output is
copied into the bucket on every deployment.
"""

from uuid import uuid4

from aws_cdk import (
    CfnOutput,
    RemovalPolicy,
    Stack,
    aws_s3 as s3,
    aws_s3_deployment as s3deploy,
)
from constructs import Construct

from chapter3_infra.config import WebSettings


def unique_bucket_name(prefix: str) -> str:
    """Return a bucket name that will not collide with earlier deployments."""
    return f"{prefix}-{uuid4()}"


class WebsiteConstruct(Construct):
    """
    Construct that hosts the front-end build in a public website bucket.

    Attributes:
        bucket_name: The generated physical bucket name
        web_bucket: The website bucket
        web_bucket_deployment: Copies the build directory into the bucket
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        settings: WebSettings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        settings = settings or WebSettings()

        self.bucket_name = unique_bucket_name(settings.bucket_name_prefix)

        # Objects are purged first, otherwise a non-empty bucket blocks teardown
        self.web_bucket = s3.Bucket(
            self,
            "WebBucket",
            bucket_name=self.bucket_name,
            website_index_document=settings.index_document,
            website_error_document=settings.index_document,
            public_read_access=True,
            block_public_access=s3.BlockPublicAccess.BLOCK_ACLS,
            access_control=s3.BucketAccessControl.BUCKET_OWNER_FULL_CONTROL,
            removal_policy=RemovalPolicy.DESTROY,
            auto_delete_objects=True,
        )

        self.web_bucket_deployment = s3deploy.BucketDeployment(
            self,
            "WebBucketDeployment",
            sources=[s3deploy.Source.asset(str(settings.build_dir))],
            destination_bucket=self.web_bucket,
        )

        # Declared on the stack so the output key stays "FrontendURL"
        CfnOutput(
            Stack.of(self),
            "FrontendURL",
            value=self.web_bucket.bucket_website_url,
            description="Static website URL",
        )
