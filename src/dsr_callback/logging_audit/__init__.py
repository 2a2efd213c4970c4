"""Logging module.

This module provides logging configuration for the callback receiver.
"""

from .logger import configure_logging, configure_server_logging

__all__ = [
    "configure_logging",
    "configure_server_logging",
]
