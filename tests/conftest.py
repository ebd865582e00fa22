"""
Module: conftest.py
Description: Shared pytest fixtures for queue transport tests.

Provides a fixed clock, sample received messages, fake SQS facades for
failure injection, and moto-backed SQS clients for tests that exercise
the real boto3 calls.
"""

from unittest.mock import MagicMock

import boto3
import pytest
import structlog
from botocore.exceptions import ClientError
from moto import mock_aws

from config.settings import Settings
from sqs_queue.client import QueueHandle, SQSAdapter
from sqs_queue.models import ReceivedMessage
from utils.logger import configure_logging

# Fixed "now" for visibility arithmetic, epoch milliseconds
NOW_MS = 1_700_000_000_000

TEST_QUEUE = "test-jobs"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Point boto3 at fake credentials so nothing reaches real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture(autouse=True)
def restore_logging():
    """Put structlog back to the default configuration after each test."""
    yield
    structlog.reset_defaults()
    configure_logging()


@pytest.fixture
def test_settings():
    """Settings with .env loading disabled for predictable tests."""
    return Settings(_env_file=None, log_level="DEBUG", default_queue=TEST_QUEUE)


@pytest.fixture
def clock():
    """Clock frozen at NOW_MS."""
    return lambda: NOW_MS


@pytest.fixture
def make_message():
    """
    Build ReceivedMessage instances.

    Defaults describe a message on its third delivery whose visibility
    window ends 10 seconds after NOW_MS.
    """
    def _make(**overrides):
        fields = {
            "body": b'{"job": "SendWelcomeEmail", "user_id": 42}',
            "receipt_handle": "AQEBwJnKyrHigUMZj6rYigCgxlaS3SLy0a",
            "dequeue_count": 3,
            "next_visible_time": NOW_MS + 10_000,
            "message_id": "5fea7756-0ea4-451a-a703-a558b933e274",
        }
        fields.update(overrides)
        return ReceivedMessage(**fields)

    return _make


@pytest.fixture
def queue_handle():
    """Fake QueueHandle recording delete and visibility calls."""
    return MagicMock(spec=QueueHandle)


@pytest.fixture
def fake_adapter(queue_handle):
    """Fake SQSAdapter whose use_queue() always returns queue_handle."""
    adapter = MagicMock(spec=SQSAdapter)
    adapter.use_queue.return_value = queue_handle
    return adapter


@pytest.fixture
def service_error():
    """ClientError as raised by SQS for an expired receipt handle."""
    return ClientError(
        {
            "Error": {
                "Code": "ReceiptHandleIsInvalid",
                "Message": "The receipt handle has expired.",
            }
        },
        "DeleteMessage",
    )


@pytest.fixture
def sqs_client():
    """boto3 SQS client backed by moto."""
    with mock_aws():
        yield boto3.client("sqs", region_name="us-east-1")


@pytest.fixture
def sqs_queue_url(sqs_client):
    """Create the test queue with a 30 second visibility timeout."""
    response = sqs_client.create_queue(
        QueueName=TEST_QUEUE,
        Attributes={"VisibilityTimeout": "30"},
    )
    return response["QueueUrl"]


@pytest.fixture
def adapter(sqs_client, sqs_queue_url):
    """SQSAdapter using the moto client and the test queue."""
    return SQSAdapter(sqs_client=sqs_client)
