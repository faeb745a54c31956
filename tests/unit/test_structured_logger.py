"""Tests for structured logging module."""

import json
import logging
from io import StringIO

import pytest

from tager.log_utils.structured_logger import (
    configure_logging,
    get_logger,
    JSONFormatter,
    StructuredLogger,
)


@pytest.fixture
def captured_log_stream():
    """Capture log output to a StringIO stream."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = get_logger("tager.test_logger")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    yield stream, logger

    logger.handlers = []
    logger.propagate = True


class TestJSONFormatter:
    """Tests for JSONFormatter class."""

    def test_basic_json_formatting(self, captured_log_stream):
        stream, logger = captured_log_stream

        logger.info("Test message")
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["level"] == "INFO"
        assert log_data["message"] == "Test message"
        assert log_data["logger"] == "tager.test_logger"
        assert "timestamp" in log_data
        assert "context" not in log_data

    def test_context_fields(self, captured_log_stream):
        stream, logger = captured_log_stream

        logger.info_ctx("Created tag", tag="music", items=["a", "b"])
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["context"] == {"tag": "music", "items": ["a", "b"]}

    def test_context_dict_and_kwargs_merge(self, captured_log_stream):
        stream, logger = captured_log_stream

        logger.warning_ctx("Skipped", {"tag": "A"}, item="B")
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["level"] == "WARNING"
        assert log_data["context"] == {"tag": "A", "item": "B"}

    def test_caller_location_recorded(self, captured_log_stream):
        stream, logger = captured_log_stream

        logger.debug_ctx("Where am I")
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["function"] == "test_caller_location_recorded"

    def test_exception_included(self, captured_log_stream):
        stream, logger = captured_log_stream

        try:
            raise ValueError("boom")
        except ValueError:
            logger.error_ctx("Failed", exc_info=True, tag="A")

        log_data = json.loads(stream.getvalue().strip())
        assert "ValueError: boom" in log_data["exception"]

    def test_unserializable_context_stringified(self, captured_log_stream):
        stream, logger = captured_log_stream

        logger.info_ctx("Path", path=object())
        log_data = json.loads(stream.getvalue().strip())

        assert log_data["context"]["path"].startswith("<object object")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_text_logging_to_stderr(self, capsys):
        configure_logging(level="INFO")

        get_logger("tager.test_text").info("hello")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "INFO" in captured.err and "hello" in captured.err

    def test_json_logging(self, capsys):
        configure_logging(use_json=True, level=logging.DEBUG)

        get_logger("tager.test_json").debug_ctx("hello", tag="A")

        log_data = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert log_data["context"] == {"tag": "A"}

    def test_level_filters(self, capsys):
        configure_logging(level="WARNING")

        get_logger("tager.test_level").info("quiet")

        assert "quiet" not in capsys.readouterr().err

    def test_log_file(self, tmp_path, capsys):
        log_file = tmp_path / "tager.log"
        configure_logging(level="INFO", log_file=log_file)

        get_logger("tager.test_file").info("to file")
        for handler in logging.root.handlers:
            handler.flush()

        assert "to file" in log_file.read_text()


def test_get_logger_returns_structured_logger():
    logger = get_logger("tager.test_get_logger")
    assert isinstance(logger, StructuredLogger)
    assert hasattr(logger, "info_ctx")


def test_get_logger_installs_logger_class():
    logging.setLoggerClass(logging.Logger)

    logger = get_logger("tager.test_new_after_reset")

    assert logging.getLoggerClass() is StructuredLogger
    assert isinstance(logger, StructuredLogger)
