"""
Tests for cslogger's own diagnostics logging
"""

import structlog

from cslogger.core.logging.logger import _processors, get_logger


def test_text_renderer_by_default(monkeypatch):
    monkeypatch.delenv("CSLOGGER_LOG_FORMAT", raising=False)
    assert isinstance(_processors()[-1], structlog.dev.ConsoleRenderer)


def test_json_renderer(monkeypatch):
    monkeypatch.setenv("CSLOGGER_LOG_FORMAT", "json")
    assert isinstance(_processors()[-1], structlog.processors.JSONRenderer)


def test_invalid_log_format_does_not_break_loggers(monkeypatch):
    monkeypatch.setenv("CSLOGGER_LOG_FORMAT", "xml")

    assert isinstance(_processors()[-1], structlog.dev.ConsoleRenderer)
    get_logger("cslogger.test").debug("still usable")
