"""
Module: queue.py
Description: SQS queue driver for the job queue.

Pushes raw payloads onto named SQS queues and pops received messages
as SQSJob instances. Payloads are passed through untouched.
"""

from typing import Callable, Optional, Union

from jobs.sqs_job import SQSJob
from sqs_queue.client import SQSAdapter
from utils.clock import now_ms
from utils.logger import get_logger

logger = get_logger(__name__)


class SQSQueue:
    """
    Job queue backed by SQS.

    Attributes:
        adapter: SQS client facade shared with the jobs it creates
        default_queue: Queue used when a call does not name one
        wait_time_seconds: Long-poll wait for pop()
        visibility_timeout: Visibility timeout requested by pop(); the
            queue's own setting when None
    """

    def __init__(
        self,
        adapter: SQSAdapter,
        default_queue: str = "default",
        wait_time_seconds: int = 0,
        visibility_timeout: Optional[int] = None,
        connection_name: str = "sqs",
        clock: Callable[[], int] = now_ms
    ):
        self.adapter = adapter
        self.default_queue = default_queue
        self.wait_time_seconds = wait_time_seconds
        self.visibility_timeout = visibility_timeout
        self.connection_name = connection_name
        self.clock = clock

    @classmethod
    def from_settings(cls, settings, adapter: Optional[SQSAdapter] = None) -> "SQSQueue":
        """
        Create a queue driver from application settings.

        Args:
            settings: Settings instance
            adapter: Existing adapter to share (built from settings if None)
        """
        return cls(
            adapter=adapter or SQSAdapter.from_settings(settings),
            default_queue=settings.default_queue,
            wait_time_seconds=settings.wait_time_seconds,
            visibility_timeout=settings.visibility_timeout
        )

    def get_queue(self, queue: Optional[str] = None) -> str:
        return queue or self.default_queue

    def size(self, queue: Optional[str] = None) -> int:
        """Approximate number of visible messages on the queue."""
        return self.adapter.use_queue(self.get_queue(queue)).approximate_size()

    def push_raw(self, payload: Union[str, bytes], queue: Optional[str] = None) -> str:
        """
        Push a raw payload onto the queue.

        Returns:
            Message ID from SQS
        """
        return self.adapter.use_queue(self.get_queue(queue)).send_message(payload)

    def later(self, delay: int, payload: Union[str, bytes], queue: Optional[str] = None) -> str:
        """
        Push a raw payload that becomes visible after delay seconds.

        Raises:
            ValueError: If delay is not between 0 and 900 seconds
        """
        if not isinstance(delay, int) or not 0 <= delay <= 900:
            raise ValueError("delay must be an integer between 0 and 900")

        return self.adapter.use_queue(self.get_queue(queue)).send_message(
            payload,
            delay_seconds=delay
        )

    def pop(self, queue: Optional[str] = None) -> Optional[SQSJob]:
        """
        Take the next message off the queue.

        Returns:
            SQSJob for the message, or None when the queue is empty
        """
        name = self.get_queue(queue)
        message = self.adapter.use_queue(name).receive_message(
            wait_time_seconds=self.wait_time_seconds,
            visibility_timeout=self.visibility_timeout
        )
        if message is None:
            return None

        logger.debug(
            "Job popped from queue",
            queue=name,
            message_id=message.message_id,
            attempts=message.dequeue_count
        )
        return SQSJob(
            self.adapter,
            name,
            message,
            connection_name=self.connection_name,
            clock=self.clock
        )
