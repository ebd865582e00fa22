"""
Module: models.py
Description: Data models for messages and listings returned by SQS.

Key Components:
- ReceivedMessage: one dequeued message with its receipt handle and
  the absolute time at which SQS will offer it again
- QueueListPage: one page of a list-queues call

Dependencies: pydantic, typing
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReceivedMessage(BaseModel):
    """
    A message received from an SQS queue.

    Attributes:
        body: Opaque payload bytes
        receipt_handle: Token required to delete the message or change
            its visibility; single-use, expires with the visibility window
        dequeue_count: Number of times SQS has delivered the message,
            including the current delivery
        next_visible_time: Epoch milliseconds at which SQS offers the
            message again if it is not deleted first
        message_id: Stable identifier of the message
    """

    model_config = ConfigDict(frozen=True)

    body: bytes = Field(..., description="Opaque message payload")
    receipt_handle: str = Field(..., min_length=1, description="Receipt handle")
    dequeue_count: int = Field(default=0, ge=0, description="Approximate receive count")
    next_visible_time: int = Field(..., description="Next visible time in epoch ms")
    message_id: str = Field(..., min_length=1, description="SQS message id")

    @classmethod
    def from_sqs(
        cls,
        raw: Dict[str, Any],
        received_at_ms: int,
        visibility_timeout: int
    ) -> "ReceivedMessage":
        """
        Build a ReceivedMessage from a boto3 receive_message entry.

        SQS does not report when a message becomes visible again, so it is
        derived from the receive time and the visibility timeout in force.

        Args:
            raw: One element of the response's 'Messages' list
            received_at_ms: Epoch milliseconds when the receive call returned
            visibility_timeout: Visibility timeout in seconds for this receive

        Returns:
            ReceivedMessage instance
        """
        attributes = raw.get('Attributes', {})
        return cls(
            body=raw.get('Body', '').encode('utf-8'),
            receipt_handle=raw['ReceiptHandle'],
            dequeue_count=int(attributes.get('ApproximateReceiveCount', 0)),
            next_visible_time=received_at_ms + visibility_timeout * 1000,
            message_id=raw['MessageId'],
        )


class QueueListPage(BaseModel):
    """One page of queue names and the marker for the next page."""

    queue_names: List[str] = Field(default_factory=list)
    next_marker: Optional[str] = None

    @classmethod
    def from_sqs(cls, response: Dict[str, Any]) -> "QueueListPage":
        """Build a page from a boto3 list_queues response."""
        names = [url.rstrip('/').rsplit('/', 1)[-1] for url in response.get('QueueUrls', [])]
        return cls(queue_names=names, next_marker=response.get('NextToken') or None)
