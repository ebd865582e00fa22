"""
Package: jobs
Description: Queue jobs handed to the worker framework.

Provides the Job contract every transport implements and the SQS job
that maps release delays onto message visibility.
"""

from .base import Job
from .sqs_job import DeleteOutcome, SQSJob

__all__ = [
    "Job",
    "SQSJob",
    "DeleteOutcome",
]
