#!/usr/bin/env python3
"""
Module: list_queues.py
Description: Console command listing SQS queues.

Walks every page of list-queues, printing each queue name in order and
a marker line between pages. A failed page stops the listing.

Usage:
    sqs-list-queues [--prefix PREFIX] [--region REGION] [--endpoint-url URL]
"""

import argparse
import base64
import binascii
import sys
from typing import Optional, TextIO

from config.settings import settings
from sqs_queue.client import SERVICE_ERRORS, SQSAdapter
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def describe_marker(marker: str) -> str:
    """Return the pagination marker base64-decoded, or as-is when it is not base64."""
    try:
        return base64.b64decode(marker, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return marker


class ListQueuesCommand:
    """
    List every queue visible to an SQS adapter.

    Attributes:
        adapter: SQS client facade
        page_size: Queue names requested per page
        out: Stream the listing is written to
    """

    def __init__(self, adapter: SQSAdapter, page_size: int = 1000, out: Optional[TextIO] = None):
        self.adapter = adapter
        self.page_size = page_size
        self.out = out

    def _print(self, line: str) -> None:
        print(line, file=self.out or sys.stdout)

    def run(self, prefix: Optional[str] = None) -> int:
        """
        Print all queue names, page by page.

        Args:
            prefix: Only list queues whose name starts with this prefix

        Returns:
            0 when every page was listed, 1 when a page failed
        """
        marker = None
        while True:
            try:
                page = self.adapter.list_queues(
                    prefix=prefix,
                    marker=marker,
                    max_results=self.page_size
                )
            except SERVICE_ERRORS as e:
                self._print(f"Failed to list queues: {e}")
                return 1

            self._print("Queues listed")
            for name in page.queue_names:
                self._print(name)

            marker = page.next_marker
            if not marker:
                return 0

            self._print(f"---next page:[{describe_marker(marker)}]---")


def main(argv=None) -> int:
    """Console script entry point."""
    parser = argparse.ArgumentParser(description="List SQS queues")
    parser.add_argument(
        '-p', '--prefix',
        type=str,
        default=None,
        help='Only list queues whose name starts with this prefix'
    )
    parser.add_argument(
        '--region',
        type=str,
        default=settings.aws_region,
        help='AWS region'
    )
    parser.add_argument(
        '--endpoint-url',
        type=str,
        default=settings.sqs_endpoint_url,
        help='SQS endpoint override'
    )
    parser.add_argument(
        '--page-size',
        type=int,
        default=settings.list_page_size,
        choices=range(1, 1001),
        metavar='[1-1000]',
        help='Queue names fetched per page'
    )

    args = parser.parse_args(argv)
    configure_logging(settings.log_level)

    adapter = SQSAdapter(region=args.region, endpoint_url=args.endpoint_url)
    command = ListQueuesCommand(adapter, page_size=args.page_size)

    try:
        return command.run(prefix=args.prefix)
    except KeyboardInterrupt:
        print("\nCancelled by user.")
        return 1


if __name__ == '__main__':
    sys.exit(main())
