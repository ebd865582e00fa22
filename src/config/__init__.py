"""
Package: config
Description: Environment-driven settings for the SQS queue transport.
"""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
