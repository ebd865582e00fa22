"""
Module: clock.py
Description: Wall-clock helpers in integer milliseconds.

SQS visibility arithmetic is done on integer epoch milliseconds so that
sub-second boundaries truncate the same way on every platform.
"""

import time


def now_ms() -> int:
    """Return the current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
