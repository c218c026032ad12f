"""
Tests for configuration settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chapter3_infra.config import (
    PROJECT_ROOT,
    ServiceSettings,
    Settings,
    TableSettings,
    WebSettings,
)


class TestTableSettings:
    """Tests for TableSettings."""

    def test_defaults(self):
        """Test default table configuration."""
        table = TableSettings()

        assert table.table_name == "main_table"
        assert table.partition_key == "partition_key"
        assert table.sort_key == "sort_key"
        assert table.billing_mode == "PAY_PER_REQUEST"

    def test_invalid_billing_mode(self):
        """Test unknown billing modes are rejected."""
        with pytest.raises(ValidationError):
            TableSettings(billing_mode="ON_DEMAND")

    def test_invalid_capacity(self):
        """Test capacity below one is rejected."""
        with pytest.raises(ValidationError):
            TableSettings(read_capacity=0)


class TestWebSettings:
    """Tests for WebSettings."""

    def test_defaults(self):
        """Test the build directory defaults under the project root."""
        web = WebSettings()

        assert web.bucket_name_prefix == "chapter-3-web-bucket"
        assert web.index_document == "index.html"
        assert web.build_dir == PROJECT_ROOT / "web" / "build"

    @pytest.mark.parametrize("prefix", ["Chapter3", "web_bucket", "-web", "x" * 27])
    def test_invalid_bucket_prefix(self, prefix):
        """Test prefixes that cannot form a valid S3 bucket name."""
        with pytest.raises(ValidationError):
            WebSettings(bucket_name_prefix=prefix)

    def test_env_override(self, monkeypatch, tmp_path):
        """Test WEB_ variables override defaults."""
        monkeypatch.setenv("WEB_BUILD_DIR", str(tmp_path))
        monkeypatch.setenv("WEB_BUCKET_NAME_PREFIX", "my-site")

        web = WebSettings()

        assert web.build_dir == tmp_path
        assert web.bucket_name_prefix == "my-site"


class TestServiceSettings:
    """Tests for ServiceSettings."""

    def test_defaults(self):
        """Test the default network contract."""
        service = ServiceSettings()

        assert service.container_name == "Express"
        assert service.container_port == 80
        assert service.listener_port == 80
        assert service.memory_limit_mib == 256
        assert service.health_check_path == "/healthcheck"
        assert service.health_check_interval_seconds == 60
        assert service.health_check_timeout_seconds == 5
        assert service.source_dir == PROJECT_ROOT / "server"

    def test_timeout_must_be_below_interval(self):
        """Test a timeout equal to the interval is rejected."""
        with pytest.raises(ValidationError):
            ServiceSettings(health_check_interval_seconds=10, health_check_timeout_seconds=10)

    def test_interval_bounds(self):
        """Test intervals outside the ALB range are rejected."""
        with pytest.raises(ValidationError):
            ServiceSettings(health_check_interval_seconds=400)

    def test_health_check_path(self):
        """Test a relative health check path is rejected."""
        with pytest.raises(ValidationError):
            ServiceSettings(health_check_path="healthcheck")

    def test_env_override(self, monkeypatch):
        """Test SERVICE_ variables override defaults."""
        monkeypatch.setenv("SERVICE_CONTAINER_PORT", "8080")
        monkeypatch.setenv("SERVICE_SOURCE_DIR", "/srv/app")

        service = ServiceSettings()

        assert service.container_port == 8080
        assert service.source_dir == Path("/srv/app")


class TestSettings:
    """Tests for the aggregated Settings."""

    def test_environment_from_env(self):
        """Test values set by the test environment."""
        settings = Settings()

        assert settings.app_env == "test"
        assert settings.region == "us-east-1"
        assert settings.account is None
        assert settings.stack_name == "Chapter3Stack"

    def test_nested_sections(self):
        """Test nested settings are populated."""
        settings = Settings()

        assert isinstance(settings.table, TableSettings)
        assert isinstance(settings.web, WebSettings)
        assert isinstance(settings.service, ServiceSettings)

    def test_stack_name_override(self, monkeypatch):
        """Test STACK_NAME overrides the default stack name."""
        monkeypatch.setenv("STACK_NAME", "Chapter3Staging")

        assert Settings().stack_name == "Chapter3Staging"
