"""Tests for log formatting and root logger setup."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator

import pytest

from deck_mcp.logging_config import JSONFormatter, configure_logging
from deck_mcp.tracing import CorrelationIdFilter


@pytest.fixture()
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("deck_mcp.client", logging.WARNING, __file__, 10, msg, args, None)


@pytest.mark.unit
def test_json_formatter_renders_message_and_level() -> None:
    entry = json.loads(JSONFormatter().format(_record("GET %s -> %d", "/boards", 200)))
    assert entry["message"] == "GET /boards -> 200"
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "deck_mcp.client"
    assert "correlation_id" not in entry


@pytest.mark.unit
def test_json_formatter_includes_correlation_id() -> None:
    record = _record("hello")
    record.correlation_id = "req-7"
    assert json.loads(JSONFormatter().format(record))["correlation_id"] == "req-7"


@pytest.mark.unit
def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            "deck_mcp", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )
    entry = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in entry["exception"]


@pytest.mark.unit
@pytest.mark.usefixtures("_restore_root_logger")
def test_configure_logging_writes_json_to_stderr() -> None:
    configure_logging(verbose=True, json_format=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr
    assert isinstance(handler.formatter, JSONFormatter)
    assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)
    assert logging.getLogger("httpx").level == logging.DEBUG


@pytest.mark.unit
@pytest.mark.usefixtures("_restore_root_logger")
def test_configure_logging_quiets_httpx_by_default() -> None:
    configure_logging()
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
