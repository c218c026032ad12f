"""
Pytest configuration and fixtures for the infrastructure tests.
"""

import os

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

# Set test environment variables
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CDK_DEFAULT_REGION"] = "us-east-1"
# Keep stacks environment-agnostic so no context lookups are needed
os.environ.pop("CDK_DEFAULT_ACCOUNT", None)


@pytest.fixture(scope="session")
def asset_dirs(tmp_path_factory):
    """Create a container build context and a web build directory."""
    root = tmp_path_factory.mktemp("assets")

    server_dir = root / "server"
    server_dir.mkdir()
    (server_dir / "Dockerfile").write_text(
        "FROM node:20-alpine\nWORKDIR /app\nCOPY . .\nEXPOSE 80\nCMD [\"node\", \"index.js\"]\n"
    )
    (server_dir / "index.js").write_text("require('http').createServer().listen(80);\n")

    build_dir = root / "web" / "build"
    build_dir.mkdir(parents=True)
    (build_dir / "index.html").write_text("<!doctype html><title>Chapter 3</title>\n")

    return server_dir, build_dir


@pytest.fixture(scope="session")
def settings(asset_dirs):
    """Create test settings pointing at the temporary asset directories."""
    from chapter3_infra.config import ServiceSettings, Settings, WebSettings

    server_dir, build_dir = asset_dirs
    return Settings(
        service=ServiceSettings(source_dir=server_dir),
        web=WebSettings(build_dir=build_dir),
    )


@pytest.fixture(scope="session")
def stack(settings):
    """Build the root stack once for the whole session."""
    from chapter3_infra.stack import Chapter3Stack

    app = cdk.App()
    return Chapter3Stack(app, "TestChapter3Stack", settings=settings)


@pytest.fixture(scope="session")
def template(stack):
    """Synthesize the root stack."""
    return Template.from_stack(stack)


@pytest.fixture
def bare_stack():
    """Create an empty stack for testing constructs in isolation."""
    return cdk.Stack(cdk.App(), "IsolatedStack")
