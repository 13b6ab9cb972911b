"""Tests for observability/logger.py"""
import io
import json
import logging
import sys

from typednotion.observability.logger import StructuredFormatter, get_logger


class TestStructuredFormatter:
    def _get_record(self, msg, level=logging.INFO, exc_info=None, extra_fields=None):
        record = logging.LogRecord(
            name="test",
            level=level,
            pathname="",
            lineno=0,
            msg=msg,
            args=(),
            exc_info=exc_info,
        )
        if extra_fields is not None:
            record.extra_fields = extra_fields
        return record

    def test_basic_format(self):
        fmt = StructuredFormatter()
        result = json.loads(fmt.format(self._get_record("hello world")))
        assert result["message"] == "hello world"
        assert result["level"] == "INFO"
        assert result["logger"] == "test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        fmt = StructuredFormatter()
        record = self._get_record("msg", extra_fields={"path": "/pages/abc", "status_code": 200})
        result = json.loads(fmt.format(record))
        assert result["path"] == "/pages/abc"
        assert result["status_code"] == 200

    def test_exception_info_included(self):
        fmt = StructuredFormatter()
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(fmt.format(self._get_record("error msg", exc_info=exc_info)))
        assert "ValueError" in result["exception"]

    def test_non_serializable_values_use_str(self):
        fmt = StructuredFormatter()
        record = self._get_record("msg", extra_fields={"obj": object()})
        result = json.loads(fmt.format(record))
        assert result["obj"].startswith("<object object")


class TestGetLogger:
    def test_returns_logger_with_handler(self):
        logger = get_logger("test.observability.unique1")
        assert isinstance(logger, logging.Logger)
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_idempotent(self):
        first = get_logger("test.observability.unique2")
        second = get_logger("test.observability.unique2")
        assert first is second
        assert len(second.handlers) == 1

    def test_string_level(self):
        logger = get_logger("test.observability.unique3", level="debug")
        assert logger.level == logging.DEBUG

    def test_writes_json_lines_to_stream(self):
        stream = io.StringIO()
        logger = get_logger("test.observability.unique4", level=logging.INFO, stream=stream)
        logger.info("Request complete", extra={"extra_fields": {"method": "GET"}})
        line = stream.getvalue().strip()
        entry = json.loads(line)
        assert entry["message"] == "Request complete"
        assert entry["method"] == "GET"
        assert entry["logger"] == "test.observability.unique4"
