"""
Module: base.py
Description: Job contract shared by queue transports.

A Job wraps one message taken off a queue. The worker runs the job and
then either deletes it or releases it back onto the queue; both outcomes
are recorded on the job so the worker can tell what happened.
"""

from abc import ABC, abstractmethod
from typing import Optional


class Job(ABC):
    """
    Base class for queue jobs.

    Attributes:
        queue: Name of the queue the job was taken from
        connection_name: Name of the queue connection
        release_delay: Delay in seconds recorded by the last release()
    """

    def __init__(self, queue: str, connection_name: str = "sqs"):
        self.queue = queue
        self.connection_name = connection_name
        self.release_delay: Optional[int] = None
        self._deleted = False
        self._released = False

    @abstractmethod
    def get_raw_body(self) -> bytes:
        """Return the raw message payload."""

    @abstractmethod
    def attempts(self) -> int:
        """Return how many times the job has been delivered."""

    @abstractmethod
    def get_job_id(self) -> str:
        """Return the transport's identifier for the job."""

    def delete(self) -> None:
        """Mark the job as deleted."""
        self._deleted = True

    def release(self, delay: int = 0) -> None:
        """
        Record that the job goes back onto the queue.

        Args:
            delay: Seconds before the job may run again

        Raises:
            ValueError: If delay is not a non-negative integer
        """
        if not isinstance(delay, int) or isinstance(delay, bool) or delay < 0:
            raise ValueError("delay must be a non-negative integer")

        self._released = True
        self.release_delay = delay

    def is_deleted(self) -> bool:
        return self._deleted

    def is_released(self) -> bool:
        return self._released

    def is_deleted_or_released(self) -> bool:
        return self.is_deleted() or self.is_released()

    def get_queue(self) -> str:
        return self.queue

    def get_connection_name(self) -> str:
        return self.connection_name
