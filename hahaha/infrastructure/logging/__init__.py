"""
Logging Infrastructure

Exports logging configuration and utilities.
"""

from hahaha.infrastructure.logging.logging_config import (
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
]
