"""
Module: client.py
Description: Synchronous SQS client facade used by queue jobs.

Routes receive, delete, change-visibility and list-queues calls to
named SQS queues. Queue names are resolved to URLs once and cached.
Every failure is logged and re-raised unchanged so callers decide
whether to recover.
"""

from typing import Callable, Dict, Optional, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sqs_queue.models import QueueListPage, ReceivedMessage
from utils.clock import now_ms
from utils.logger import get_logger

logger = get_logger(__name__)

# Failures raised by any facade call
SERVICE_ERRORS = (ClientError, BotoCoreError)


def _log_service_error(message: str, error: Exception, **context) -> None:
    if isinstance(error, ClientError):
        logger.error(
            message,
            error_code=error.response['Error']['Code'],
            error_message=error.response['Error']['Message'],
            **context
        )
    else:
        logger.error(message, error=str(error), error_type=type(error).__name__, **context)


class SQSAdapter:
    """
    SQS client facade shared by every job of a connection.

    Attributes:
        region: AWS region used when the boto3 client is created lazily
        endpoint_url: Optional endpoint override (local emulators)
        clock: Callable returning epoch milliseconds

    Example:
        >>> adapter = SQSAdapter(region="us-east-1")
        >>> message = adapter.use_queue("emails").receive_message()
        >>> adapter.use_queue("emails").delete_message(message.receipt_handle)
    """

    def __init__(
        self,
        sqs_client=None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        clock: Callable[[], int] = now_ms
    ):
        """
        Initialize the adapter.

        Args:
            sqs_client: boto3 SQS client (created on first use if None)
            region: AWS region for the lazily created client
            endpoint_url: Optional SQS endpoint override
            clock: Callable returning epoch milliseconds
        """
        self._client = sqs_client
        self.region = region
        self.endpoint_url = endpoint_url
        self.clock = clock
        self._queues: Dict[str, "QueueHandle"] = {}

    @classmethod
    def from_settings(cls, settings) -> "SQSAdapter":
        """Create an adapter from application settings."""
        return cls(region=settings.aws_region, endpoint_url=settings.sqs_endpoint_url)

    @property
    def client(self):
        """Lazy-load the boto3 SQS client."""
        if self._client is None:
            self._client = boto3.client(
                'sqs',
                region_name=self.region,
                endpoint_url=self.endpoint_url
            )
            logger.info(
                "SQS client initialized",
                region=self.region,
                endpoint_url=self.endpoint_url
            )
        return self._client

    def use_queue(self, name: str) -> "QueueHandle":
        """
        Return the handle for a named queue.

        Args:
            name: SQS queue name

        Raises:
            ValueError: If name is empty
        """
        if not name or not isinstance(name, str):
            raise ValueError("queue name must be a non-empty string")

        if name not in self._queues:
            self._queues[name] = QueueHandle(self, name)
        return self._queues[name]

    def list_queues(
        self,
        prefix: Optional[str] = None,
        marker: Optional[str] = None,
        max_results: int = 1000
    ) -> QueueListPage:
        """
        Fetch one page of queue names.

        Args:
            prefix: Only list queues whose name starts with this prefix
            marker: Pagination token returned by the previous page
            max_results: Page size (1-1000)

        Returns:
            QueueListPage with names and the next marker (None on last page)

        Raises:
            ClientError, BotoCoreError: If the SQS call fails
        """
        params = {'MaxResults': max_results}
        if prefix:
            params['QueueNamePrefix'] = prefix
        if marker:
            params['NextToken'] = marker

        try:
            response = self.client.list_queues(**params)
        except SERVICE_ERRORS as e:
            _log_service_error("Failed to list SQS queues", e, prefix=prefix)
            raise

        page = QueueListPage.from_sqs(response)
        logger.debug(
            "Listed SQS queues",
            prefix=prefix,
            count=len(page.queue_names),
            has_more=page.next_marker is not None
        )
        return page


class QueueHandle:
    """
    Operations on one named SQS queue.

    Created through SQSAdapter.use_queue(); holds the resolved queue URL
    and the queue's default visibility timeout once fetched.
    """

    def __init__(self, adapter: SQSAdapter, name: str):
        self.adapter = adapter
        self.name = name
        self._url: Optional[str] = None
        self._visibility_timeout: Optional[int] = None

    @property
    def url(self) -> str:
        """Queue URL, resolved from the name on first use."""
        if self._url is None:
            try:
                response = self.adapter.client.get_queue_url(QueueName=self.name)
            except SERVICE_ERRORS as e:
                _log_service_error("Failed to resolve SQS queue URL", e, queue=self.name)
                raise
            self._url = response['QueueUrl']
        return self._url

    def send_message(self, body: Union[str, bytes], delay_seconds: int = 0) -> str:
        """
        Send a raw payload to the queue.

        Args:
            body: Payload; bytes are sent as UTF-8 text
            delay_seconds: Delay before the message becomes visible (0-900)

        Returns:
            Message ID from SQS

        Raises:
            ValueError: If body is bytes that are not valid UTF-8 text
            ClientError, BotoCoreError: If the SQS call fails
        """
        if isinstance(body, bytes):
            try:
                body = body.decode('utf-8')
            except UnicodeDecodeError as e:
                raise ValueError("payload bytes must be valid UTF-8 text") from e

        try:
            response = self.adapter.client.send_message(
                QueueUrl=self.url,
                MessageBody=body,
                DelaySeconds=delay_seconds
            )
        except SERVICE_ERRORS as e:
            _log_service_error("Failed to send message to SQS", e, queue=self.name)
            raise

        message_id = response['MessageId']
        logger.info(
            "Message sent to SQS",
            queue=self.name,
            message_id=message_id,
            delay_seconds=delay_seconds
        )
        return message_id

    def receive_message(
        self,
        wait_time_seconds: int = 0,
        visibility_timeout: Optional[int] = None
    ) -> Optional[ReceivedMessage]:
        """
        Receive at most one message.

        Args:
            wait_time_seconds: Long-poll wait (0-20)
            visibility_timeout: Visibility timeout for this receive; the
                queue's own setting when None

        Returns:
            ReceivedMessage, or None when the queue is empty

        Raises:
            ClientError, BotoCoreError: If the SQS call fails
        """
        params = {
            'QueueUrl': self.url,
            'MaxNumberOfMessages': 1,
            'WaitTimeSeconds': wait_time_seconds,
            'AttributeNames': ['ApproximateReceiveCount'],
        }
        if visibility_timeout is None:
            # Read before receiving so a failure here dequeues nothing
            visibility_timeout = self.get_visibility_timeout()
        params['VisibilityTimeout'] = visibility_timeout

        try:
            response = self.adapter.client.receive_message(**params)
        except SERVICE_ERRORS as e:
            _log_service_error("Failed to receive message from SQS", e, queue=self.name)
            raise

        received_at = self.adapter.clock()
        messages = response.get('Messages', [])
        if not messages:
            return None

        message = ReceivedMessage.from_sqs(messages[0], received_at, visibility_timeout)
        logger.debug(
            "Message received from SQS",
            queue=self.name,
            message_id=message.message_id,
            dequeue_count=message.dequeue_count
        )
        return message

    def delete_message(self, receipt_handle: str) -> None:
        """
        Delete a message by receipt handle.

        Raises:
            ValueError: If receipt_handle is empty
            ClientError, BotoCoreError: If the SQS call fails
        """
        if not receipt_handle or not isinstance(receipt_handle, str):
            raise ValueError("receipt_handle must be a non-empty string")

        try:
            self.adapter.client.delete_message(
                QueueUrl=self.url,
                ReceiptHandle=receipt_handle
            )
        except SERVICE_ERRORS as e:
            _log_service_error("Failed to delete message from SQS", e, queue=self.name)
            raise

        logger.debug("Message deleted from SQS", queue=self.name)

    def change_message_visibility(self, receipt_handle: str, delay_seconds: int) -> None:
        """
        Make a received message visible again after delay_seconds.

        Raises:
            ValueError: If receipt_handle is empty
            ClientError, BotoCoreError: If the SQS call fails
        """
        if not receipt_handle or not isinstance(receipt_handle, str):
            raise ValueError("receipt_handle must be a non-empty string")

        try:
            self.adapter.client.change_message_visibility(
                QueueUrl=self.url,
                ReceiptHandle=receipt_handle,
                VisibilityTimeout=delay_seconds
            )
        except SERVICE_ERRORS as e:
            _log_service_error(
                "Failed to change message visibility",
                e,
                queue=self.name,
                delay_seconds=delay_seconds
            )
            raise

        logger.debug(
            "Message visibility changed",
            queue=self.name,
            delay_seconds=delay_seconds
        )

    def get_visibility_timeout(self) -> int:
        """Queue's default visibility timeout in seconds (cached)."""
        if self._visibility_timeout is None:
            self._visibility_timeout = int(self._get_attribute('VisibilityTimeout'))
        return self._visibility_timeout

    def approximate_size(self) -> int:
        """Approximate number of visible messages in the queue."""
        return int(self._get_attribute('ApproximateNumberOfMessages'))

    def _get_attribute(self, attribute: str) -> str:
        try:
            response = self.adapter.client.get_queue_attributes(
                QueueUrl=self.url,
                AttributeNames=[attribute]
            )
        except SERVICE_ERRORS as e:
            _log_service_error(
                "Failed to read SQS queue attribute",
                e,
                queue=self.name,
                attribute=attribute
            )
            raise
        return response['Attributes'][attribute]
