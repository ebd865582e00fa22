"""
Module: utils
Description: Package initialization for utility functions.

Shared helpers used by the queue transport:
- logger: Structured logging configuration and helpers
- clock: Integer millisecond wall clock
"""

__all__ = []
