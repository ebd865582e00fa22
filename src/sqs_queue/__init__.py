"""
Package: sqs_queue
Description: SQS transport for the job queue.

Provides the synchronous SQS client facade, the models for received
messages and queue listings, and the queue driver that turns received
messages into jobs.
"""
