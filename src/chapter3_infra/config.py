"""
Configuration settings for the Chapter 3 infrastructure.

Uses pydantic-settings for type-safe configuration management with
environment variable support. Every constant the constructs declare
(names, ports, sizes, asset paths) lives here.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# src/chapter3_infra/config.py -> repository root
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# S3 bucket names are at most 63 characters; a uuid4 plus its separator takes 37
MAX_BUCKET_PREFIX_LENGTH = 63 - 37

_BUCKET_PREFIX_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")


class TableSettings(BaseSettings):
    """DynamoDB table configuration."""

    model_config = SettingsConfigDict(env_prefix="TABLE_", extra="ignore")

    table_name: str = Field(default="main_table", description="DynamoDB table name")
    partition_key: str = Field(default="partition_key", description="Partition key attribute")
    sort_key: str = Field(default="sort_key", description="Sort key attribute")
    billing_mode: Literal["PAY_PER_REQUEST", "PROVISIONED"] = Field(
        default="PAY_PER_REQUEST",
        description="On-demand or pre-provisioned capacity",
    )
    read_capacity: int = Field(default=5, description="Read capacity units (PROVISIONED only)")
    write_capacity: int = Field(default=5, description="Write capacity units (PROVISIONED only)")

    @field_validator("read_capacity", "write_capacity")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Capacity units must be at least 1")
        return v


class WebSettings(BaseSettings):
    """Static website bucket configuration."""

    model_config = SettingsConfigDict(env_prefix="WEB_", extra="ignore")

    bucket_name_prefix: str = Field(
        default="chapter-3-web-bucket",
        description="Prefix for the generated bucket name",
    )
    # index.html doubles as the error document for the single-page app
    index_document: str = Field(default="index.html", description="Index and error document")
    build_dir: Path = Field(
        default=PROJECT_ROOT / "web" / "build",
        description="Front-end build output copied into the bucket",
    )

    @field_validator("bucket_name_prefix")
    @classmethod
    def validate_bucket_name_prefix(cls, v: str) -> str:
        if not _BUCKET_PREFIX_PATTERN.match(v):
            raise ValueError(
                "Bucket name prefix may only contain lowercase letters, digits and hyphens"
            )
        if len(v) > MAX_BUCKET_PREFIX_LENGTH:
            raise ValueError(
                f"Bucket name prefix must be at most {MAX_BUCKET_PREFIX_LENGTH} characters"
            )
        return v


class ServiceSettings(BaseSettings):
    """ECS backend service and load balancer configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVICE_", extra="ignore")

    max_azs: int = Field(default=2, description="Availability zones spanned by the VPC")
    instance_type: str = Field(default="t2.micro", description="Cluster capacity instance type")
    source_dir: Path = Field(
        default=PROJECT_ROOT / "server",
        description="Container build context holding the Dockerfile",
    )
    container_name: str = Field(default="Express", description="Container name in the task")
    container_port: int = Field(default=80, description="Port the container listens on")
    memory_limit_mib: int = Field(default=256, description="Container memory ceiling")
    log_stream_prefix: str = Field(default="chapter3", description="awslogs stream prefix")
    listener_port: int = Field(default=80, description="Public load balancer port")
    health_check_path: str = Field(default="/healthcheck", description="Health check path")
    health_check_interval_seconds: int = Field(default=60, description="Health check interval")
    health_check_timeout_seconds: int = Field(default=5, description="Health check timeout")

    @field_validator("health_check_path")
    @classmethod
    def validate_health_check_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("Health check path must start with '/'")
        return v

    @field_validator("health_check_interval_seconds")
    @classmethod
    def validate_interval(cls, v: int) -> int:
        if not 5 <= v <= 300:
            raise ValueError("Health check interval must be between 5 and 300 seconds")
        return v

    @field_validator("health_check_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: int, info) -> int:
        if not 2 <= v <= 120:
            raise ValueError("Health check timeout must be between 2 and 120 seconds")
        interval = info.data.get("health_check_interval_seconds")
        if interval is not None and v >= interval:
            raise ValueError("Health check timeout must be less than the interval")
        return v


class Settings(BaseSettings):
    """Main infrastructure settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    stack_name: str = Field(default="Chapter3Stack", alias="STACK_NAME")
    account: str | None = Field(default=None, alias="CDK_DEFAULT_ACCOUNT")
    region: str = Field(default="us-east-1", alias="CDK_DEFAULT_REGION")

    # Nested settings
    table: TableSettings = Field(default_factory=TableSettings)
    web: WebSettings = Field(default_factory=WebSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
