"""
CDK application builder.

Deploy with: cdk deploy
"""

import aws_cdk as cdk
import structlog

from chapter3_infra.config import Settings, get_settings
from chapter3_infra.log_config import configure_logging
from chapter3_infra.stack import Chapter3Stack

logger = structlog.get_logger(__name__)


def build_app(
    settings: Settings | None = None,
    app: cdk.App | None = None,
) -> tuple[cdk.App, Chapter3Stack]:
    """Create the CDK app and load the root stack into it."""
    settings = settings or get_settings()
    app = app or cdk.App()

    # Context (-c environment=prod) wins over APP_ENV
    environment = app.node.try_get_context("environment") or settings.app_env

    env = cdk.Environment(account=settings.account, region=settings.region)

    stack = Chapter3Stack(
        app,
        settings.stack_name,
        settings=settings,
        env=env,
        description=f"Chapter 3 web application ({environment})",
    )

    # Add tags to all resources
    cdk.Tags.of(app).add("Project", "Chapter3")
    cdk.Tags.of(app).add("Environment", environment)
    cdk.Tags.of(app).add("ManagedBy", "CDK")

    logger.info(
        "Loaded stack",
        stack=stack.stack_name,
        environment=environment,
        region=settings.region,
    )

    return app, stack


def main(app: cdk.App | None = None):
    """Create, configure and synthesize the CDK app."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app, _ = build_app(settings, app)
    app.synth()
