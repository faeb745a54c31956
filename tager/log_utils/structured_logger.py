"""Structured logging with optional JSON output."""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Any, Dict, Optional, Union
from pathlib import Path


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as JSON with standard fields, plus the ``context``
    mapping attached by :class:`StructuredLogger`.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            str: JSON-formatted log string.
        """
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "context") and record.context:
            log_data["context"] = record.context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class StructuredLogger(logging.Logger):
    """
    Logger with convenience methods that accept context as kwargs.

    Example:
        logger.info_ctx("Tag created", tag="music")
    """

    def _log_with_context(
        self,
        level: int,
        msg: str,
        context: Optional[Dict[str, Any]] = None,
        exc_info: Any = None,
        **kwargs
    ) -> None:
        final_context = {}
        if context:
            final_context.update(context)
        if kwargs:
            final_context.update(kwargs)

        extra = {"context": final_context} if final_context else {}

        # stacklevel points the record at the caller of *_ctx
        self.log(level, msg, exc_info=exc_info, extra=extra, stacklevel=3)

    def debug_ctx(self, msg: str, context: Optional[Dict[str, Any]] = None, **kwargs) -> None:
        """Log debug message with context."""
        self._log_with_context(logging.DEBUG, msg, context, **kwargs)

    def info_ctx(self, msg: str, context: Optional[Dict[str, Any]] = None, **kwargs) -> None:
        """Log info message with context."""
        self._log_with_context(logging.INFO, msg, context, **kwargs)

    def warning_ctx(self, msg: str, context: Optional[Dict[str, Any]] = None, **kwargs) -> None:
        """Log warning message with context."""
        self._log_with_context(logging.WARNING, msg, context, **kwargs)

    def error_ctx(
        self,
        msg: str,
        context: Optional[Dict[str, Any]] = None,
        exc_info: Any = None,
        **kwargs
    ) -> None:
        """
        Log error message with context.

        Args:
            msg: Log message
            context: Dictionary of context fields
            exc_info: Exception info (True, exception instance, or exc_info tuple)
            **kwargs: Additional context fields as keyword arguments
        """
        self._log_with_context(logging.ERROR, msg, context, exc_info=exc_info, **kwargs)


def configure_logging(
    use_json: bool = False,
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure structured logging globally.

    Console output goes to stderr: stdout carries command output such as
    file lists meant for shell substitution.

    Args:
        use_json: Whether to use JSON formatting
        level: Log level as an int or a level name
        log_file: Optional file path to write logs to
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.setLoggerClass(StructuredLogger)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if use_json:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Backward compatible with logging.getLogger(), but the returned logger
    also has the *_ctx methods.

    Args:
        name: Logger name (typically __name__)
    """
    if not issubclass(logging.getLoggerClass(), StructuredLogger):
        logging.setLoggerClass(StructuredLogger)

    return logging.getLogger(name)
