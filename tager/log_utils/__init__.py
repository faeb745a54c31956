"""Structured logging module for JSON-formatted logs."""

from tager.log_utils.structured_logger import (
    configure_logging,
    get_logger,
    JSONFormatter,
    StructuredLogger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "JSONFormatter",
    "StructuredLogger",
]
