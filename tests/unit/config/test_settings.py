"""
Module: test_settings.py
Description: Unit tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings


class TestSettings:
    """Test cases for Settings defaults and validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.aws_region == "us-east-1"
        assert settings.sqs_endpoint_url is None
        assert settings.default_queue == "default"
        assert settings.wait_time_seconds == 0
        assert settings.visibility_timeout is None
        assert settings.list_page_size == 1000

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_QUEUE", "emails")
        monkeypatch.setenv("SQS_ENDPOINT_URL", "http://localhost:9324")
        monkeypatch.setenv("VISIBILITY_TIMEOUT", "60")

        settings = Settings(_env_file=None)

        assert settings.default_queue == "emails"
        assert settings.sqs_endpoint_url == "http://localhost:9324"
        assert settings.visibility_timeout == 60

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="VERBOSE")

    @pytest.mark.parametrize("name", ["jobs.fifo", "high-priority_1"])
    def test_valid_queue_names(self, name):
        assert Settings(_env_file=None, default_queue=name).default_queue == name

    @pytest.mark.parametrize("name", ["", "bad name", "x" * 81, "jobs.txt"])
    def test_invalid_queue_names(self, name):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_queue=name)

    @pytest.mark.parametrize("field,value", [
        ("wait_time_seconds", 21),
        ("visibility_timeout", 43201),
        ("list_page_size", 0),
    ])
    def test_out_of_range_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})
