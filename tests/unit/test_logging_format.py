"""Tests for unified logging format.

Target format: 2026-01-06T14:05:52Z [source] LEVEL message
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime

import pytest

from hoopcamps.logging_config import (
    TRACE,
    HealthCheckFilter,
    ISO8601Formatter,
    configure_logging,
    get_logger,
)


def make_record(msg: str, level: int = logging.INFO, args: tuple = (), name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(name=name, level=level, pathname="", lineno=0, msg=msg, args=args, exc_info=None)


class TestISO8601Formatter:
    def test_format_matches_expected_layout(self):
        output = ISO8601Formatter(source="test").format(make_record("Test message"))

        pattern = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z \[test\] INFO Test message$"
        assert re.match(pattern, output), f"Output '{output}' doesn't match expected format"

    def test_timestamp_is_utc(self):
        output = ISO8601Formatter(source="api").format(make_record("Test"))
        timestamp_str = output.split(" ")[0]

        assert timestamp_str.endswith("Z")
        assert datetime.fromisoformat(timestamp_str.replace("Z", "+00:00")) is not None

    @pytest.mark.parametrize(
        "level,level_name",
        [
            (logging.DEBUG, "DEBUG"),
            (logging.INFO, "INFO"),
            (logging.WARNING, "WARNING"),
            (logging.ERROR, "ERROR"),
            (TRACE, "TRACE"),
        ],
    )
    def test_levels(self, level, level_name):
        output = ISO8601Formatter(source="test").format(make_record("Message", level=level))
        assert f"] {level_name} " in output

    def test_message_formatting_with_args(self):
        record = make_record("Submission %s approved by %s", args=("sub1", "admin1"))
        output = ISO8601Formatter(source="test").format(record)
        assert "Submission sub1 approved by admin1" in output


class TestHealthCheckFilter:
    def test_suppresses_health_endpoint_at_info_level(self):
        record = make_record('127.0.0.1:56948 - "GET /health HTTP/1.1" 200 OK', name="uvicorn.access")
        assert HealthCheckFilter().filter(record) is False

    def test_suppresses_api_health_endpoint(self):
        record = make_record('192.168.32.3:40210 - "GET /api/health HTTP/1.1" 200 OK', name="uvicorn.access")
        assert HealthCheckFilter().filter(record) is False

    def test_allows_other_endpoints(self):
        record = make_record('127.0.0.1:56948 - "GET /api/camps HTTP/1.1" 200 OK', name="uvicorn.access")
        assert HealthCheckFilter().filter(record) is True

    def test_allows_health_at_debug_level(self):
        record = make_record('127.0.0.1:56948 - "GET /health HTTP/1.1" 200 OK', level=logging.DEBUG)
        assert HealthCheckFilter().filter(record) is True


class TestConfigureLogging:
    def test_default_level_is_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = configure_logging(source="test", debug=False)
        assert logger.level == logging.INFO

    def test_debug_flag(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = configure_logging(source="test", debug=True)
        assert logger.level == logging.DEBUG

    def test_trace_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "trace")
        logger = configure_logging(source="test")
        assert logger.level == TRACE

    def test_quiets_http_client_loggers(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        configure_logging(source="test")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_get_logger_returns_named_logger(self):
        assert get_logger("hoopcamps.test").name == "hoopcamps.test"


def test_end_to_end_log_output(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    configure_logging(source="integration_test", debug=False)
    logger = get_logger("test")

    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ISO8601Formatter(source="integration_test"))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)

    logger.info("Test integration message")

    pattern = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z \[integration_test\] INFO Test integration message\n$"
    assert re.match(pattern, stream.getvalue())
