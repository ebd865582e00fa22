"""
Module: sqs_job.py
Description: Job backed by a message received from SQS.

Deleting the job deletes the message. Releasing the job changes the
message's visibility timeout so SQS redelivers it after the delay.

A release delay of 0 asks for the queue's own redelivery time, but SQS
needs an explicit visibility timeout. The job therefore sends the
seconds remaining until the message's current visibility window ends,
and at least 1.
"""

from typing import Callable, NamedTuple, Optional

from jobs.base import Job
from sqs_queue.client import SERVICE_ERRORS, SQSAdapter
from sqs_queue.models import ReceivedMessage
from utils.clock import now_ms
from utils.logger import get_logger

logger = get_logger(__name__)


class DeleteOutcome(NamedTuple):
    """Result of a delete attempt; error is set when SQS refused it."""

    succeeded: bool
    error: Optional[Exception] = None


class SQSJob(Job):
    """
    Job wrapping one received SQS message.

    Attributes:
        adapter: Shared SQS client facade
        queue: Name of the queue the message came from
        message: The received message

    Example:
        >>> job = SQSJob(adapter, "emails", message)
        >>> job.release(0)      # back after the current visibility window
        >>> job.release(30)     # back in 30 seconds
    """

    def __init__(
        self,
        adapter: SQSAdapter,
        queue: str,
        message: ReceivedMessage,
        connection_name: str = "sqs",
        clock: Callable[[], int] = now_ms
    ):
        super().__init__(queue, connection_name)
        self.adapter = adapter
        self.message = message
        self.clock = clock

    def get_raw_body(self) -> bytes:
        return self.message.body

    def attempts(self) -> int:
        return int(self.message.dequeue_count)

    def get_job_id(self) -> str:
        return self.message.message_id

    def delete(self) -> None:
        """
        Delete the message from its queue.

        Never raises: if SQS rejects the delete (for example because the
        receipt handle expired) the job stays not deleted and the message
        is redelivered when its visibility timeout ends.
        """
        outcome = self._delete_message()
        self._deleted = outcome.succeeded

    def release(self, delay: int = 0) -> None:
        """
        Release the job back onto the queue.

        Args:
            delay: Seconds before redelivery; 0 keeps the current
                visibility window

        Raises:
            ValueError: If delay is negative
            ClientError, BotoCoreError: If SQS rejects the visibility change
        """
        if delay == 0:
            delay = self._seconds_until_visible()

        super().release(delay)
        self.adapter.use_queue(self.queue).change_message_visibility(
            self.message.receipt_handle,
            delay
        )

        logger.info(
            "Job released",
            queue=self.queue,
            message_id=self.message.message_id,
            delay_seconds=delay,
            attempts=self.attempts()
        )

    def _delete_message(self) -> DeleteOutcome:
        try:
            self.adapter.use_queue(self.queue).delete_message(self.message.receipt_handle)
        except SERVICE_ERRORS as e:
            logger.warning(
                "Job delete failed, message will be redelivered",
                queue=self.queue,
                message_id=self.message.message_id,
                error=str(e)
            )
            return DeleteOutcome(succeeded=False, error=e)

        logger.info("Job deleted", queue=self.queue, message_id=self.message.message_id)
        return DeleteOutcome(succeeded=True)

    def _seconds_until_visible(self) -> int:
        remaining_ms = self.message.next_visible_time - self.clock()
        seconds = remaining_ms // 1000
        # At least one second, also when the window already passed
        return seconds if seconds > 0 else 1
