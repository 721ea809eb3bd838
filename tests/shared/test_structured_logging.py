"""Tests for the structured logging helpers."""

from __future__ import annotations

import json
import logging

from rich.logging import RichHandler

from kitchensync.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from kitchensync.shared.logging import (
    StructuredFormatter,
    log_api_call,
    log_cache_event,
    log_operation_error,
    setup_structured_logger,
)


class TestSetupStructuredLogger:
    """Test logger configuration."""

    def test_rich_console_handler(self):
        logger = setup_structured_logger("kitchensync.test.rich", level="debug")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.propagate is False

    def test_reconfigure_replaces_handlers(self, tmp_path):
        setup_structured_logger("kitchensync.test.file", log_file=str(tmp_path / "a.log"))
        logger = setup_structured_logger(
            "kitchensync.test.file",
            level="WARNING",
            log_file=str(tmp_path / "b.log"),
            use_rich_console=False,
        )

        assert len(logger.handlers) == 2
        for handler in logger.handlers:
            assert isinstance(handler.formatter, StructuredFormatter)
            handler.close()

    def test_file_records_are_json(self, tmp_path):
        log_file = tmp_path / "kitchensync.log"
        logger = setup_structured_logger(
            "kitchensync.test.json",
            level="INFO",
            log_file=str(log_file),
            use_rich_console=False,
        )

        log_api_call(logger, "/food/products/search", status_code=200, duration_ms=12.345)
        for handler in logger.handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["level"] == "INFO"
        assert record["operation"] == "api_call"
        assert record["context"] == {
            "endpoint": "/food/products/search",
            "method": "GET",
            "status_code": 200,
            "duration_ms": 12.35,
        }
        for handler in logger.handlers:
            handler.close()


class TestLogHelpers:
    """Test helper log levels and extras."""

    def test_api_call_failure_is_error(self, caplog):
        logger = logging.getLogger("test.api")

        with caplog.at_level(logging.INFO, logger="test.api"):
            log_api_call(logger, "/recipes/complexSearch", status_code=402)

        assert caplog.records[0].levelno == logging.ERROR
        assert "failed with status 402" in caplog.records[0].message

    def test_operation_error_masks_user_and_merges_context(self, caplog):
        logger = logging.getLogger("test.error")
        error = InfrastructureError(
            ErrorCode.CACHE_READ_FAILED,
            "disk gone",
            ErrorContext(operation="get", user_id="u1", additional_data={"cache_key": "map:ab"}),
        )

        with caplog.at_level(logging.WARNING, logger="test.error"):
            log_operation_error(logger, error, context={"attempt": 1}, level=logging.WARNING)

        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.error_code == "CACHE_READ_FAILED"
        assert record.operation == "get"
        assert "user_id" not in record.context
        assert record.context["attempt"] == 1

    def test_cache_event_is_debug(self, caplog):
        logger = logging.getLogger("test.cache")

        with caplog.at_level(logging.DEBUG, logger="test.cache"):
            log_cache_event(logger, "hit", "groceries:ab")

        assert caplog.records[0].levelno == logging.DEBUG
        assert caplog.records[0].context == {"cache_key": "groceries:ab", "event": "hit"}
