"""
Chapter 3 infrastructure - AWS CDK definition of a three-tier web app.

Declares a DynamoDB table, an S3 static website for the front-end, and an
ECS service behind an Application Load Balancer for the back-end.
"""

__version__ = "0.1.0"

from chapter3_infra.config import Settings
from chapter3_infra.stack import Chapter3Stack

__all__ = ["Settings", "Chapter3Stack", "__version__"]
