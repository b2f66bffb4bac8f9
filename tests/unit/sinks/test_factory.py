import logging
import socket
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest

from cslogger.core.config.resolver import resolve_settings
from cslogger.core.config.settings import (
    ConsoleConfig,
    FileConfig,
    LoggerSettings,
    RemoteConfig,
)
from cslogger.core.exceptions.custom_exceptions import ConfigurationError
from cslogger.core.levels import SeverityLevel
from cslogger.sinks.base import SinkKind
from cslogger.sinks.console import RichConsoleHandler
from cslogger.sinks.factory import SinkFactory, sink_level
from cslogger.sinks.file import numbered_name
from cslogger.sinks.syslog import MappedSyslogHandler


@pytest.fixture
def factory():
    return SinkFactory(app_name="mylog", hostname="testhost")


def test_sink_level_can_only_tighten():
    assert sink_level(None, SeverityLevel.DEBUG) is SeverityLevel.DEBUG
    assert sink_level("warn", SeverityLevel.DEBUG) is SeverityLevel.WARN
    assert sink_level("trace", SeverityLevel.INFO) is SeverityLevel.INFO


def test_console_sink(factory):
    sink = factory.build_console_sink(ConsoleConfig(), SeverityLevel.INFO)
    assert sink.kind is SinkKind.CONSOLE
    assert isinstance(sink.handler, RichConsoleHandler)
    assert sink.level_name == "info"
    assert sink.handler.level == logging.INFO
    assert sink.accepts(SeverityLevel.WARN)
    assert not sink.accepts(SeverityLevel.DEBUG)


def test_plain_console_sink(factory):
    sink = factory.build_console_sink(ConsoleConfig(colorize=False), SeverityLevel.INFO)
    assert type(sink.handler) is logging.StreamHandler


def test_file_sink_without_rotation(factory, log_file):
    sink = factory.build_file_sink(FileConfig(path=str(log_file)), SeverityLevel.TRACE)
    try:
        assert type(sink.handler) is logging.FileHandler
        assert sink.handler.level == 5
    finally:
        sink.close()


def test_file_sink_with_rotation_defaults(factory, log_file):
    config = LoggerSettings.parse(
        {"file": {"path": str(log_file), "rollingFile": {}}}
    ).file
    sink = factory.build_file_sink(config, SeverityLevel.INFO)
    try:
        assert isinstance(sink.handler, RotatingFileHandler)
        assert sink.handler.maxBytes == 10_000_000
        assert sink.handler.backupCount == 9
    finally:
        sink.close()


def test_file_sink_unopenable_path(factory, tmp_path):
    config = FileConfig(path=str(tmp_path / "missing" / "dir" / "app.log"))
    with pytest.raises(ConfigurationError) as exc_info:
        factory.build_file_sink(config, SeverityLevel.INFO)
    assert exc_info.value.details["field"] == "file.path"


@pytest.mark.parametrize(
    "default_name,expected",
    [
        ("/tmp/cs_logger_test.log.1", "/tmp/cs_logger_test1.log"),
        ("/tmp/cs_logger_test.log.12", "/tmp/cs_logger_test12.log"),
        ("/var/log/app.1", "/var/log/app1"),
    ],
)
def test_numbered_rotation_names(default_name, expected):
    assert numbered_name(default_name) == expected


@pytest.mark.parametrize(
    "config,field",
    [
        ({"protocol": "tls4"}, "syslog.protocol"),
        ({"type": "RFC9999"}, "syslog.type"),
        ({"facility": "kitchen"}, "syslog.facility"),
    ],
)
def test_remote_sink_rejects_unsupported_values(factory, config, field):
    with pytest.raises(ConfigurationError) as exc_info:
        factory.build_remote_sink(RemoteConfig(**config), SeverityLevel.INFO)
    assert exc_info.value.details["field"] == field


def test_remote_sink_defaults(factory):
    sink = factory.build_remote_sink(RemoteConfig(port=1514), SeverityLevel.DEBUG)
    try:
        handler = sink.handler
        assert isinstance(handler, MappedSyslogHandler)
        assert handler.address == ("localhost", 1514)
        assert handler.framing == "RFC5425"
        assert handler.app_name == "mylog"
        assert handler.localhost == "testhost"
        assert handler.socktype == socket.SOCK_DGRAM
    finally:
        sink.close()


def test_remote_localhost_uses_explicit_host(factory):
    sink = factory.build_remote_sink(
        RemoteConfig(host="127.0.0.1", port=1514, type="bsd"), SeverityLevel.DEBUG
    )
    try:
        assert sink.handler.localhost == "127.0.0.1"
        assert sink.handler.framing == "BSD"
    finally:
        sink.close()


def test_build_all_keeps_declared_order(factory, log_file):
    settings = resolve_settings(
        LoggerSettings.parse(
            {
                "syslog": {"host": "127.0.0.1", "port": 1514},
                "file": {"path": str(log_file)},
                "console": {},
            }
        )
    )
    sinks = factory.build_all(settings)
    try:
        assert [sink.kind for sink in sinks] == [
            SinkKind.CONSOLE,
            SinkKind.FILE,
            SinkKind.REMOTE,
        ]
    finally:
        for sink in sinks:
            sink.close()


def test_build_all_closes_built_sinks_on_failure(factory, log_file, monkeypatch):
    closed = []
    monkeypatch.setattr(
        "cslogger.sinks.base.Sink.discard", lambda sink: closed.append(sink.kind)
    )
    settings = resolve_settings(
        LoggerSettings.parse(
            {
                "console": {},
                "file": {"path": str(log_file)},
                "syslog": {"protocol": "carrier-pigeon"},
            }
        )
    )
    with pytest.raises(ConfigurationError):
        factory.build_all(settings)
    assert closed == [SinkKind.CONSOLE, SinkKind.FILE]


def test_remote_sink_unreachable_transport(factory):
    with patch(
        "cslogger.sinks.factory.MappedSyslogHandler",
        side_effect=ConnectionRefusedError("refused"),
    ) as handler_cls:
        with pytest.raises(ConfigurationError) as exc_info:
            factory.build_remote_sink(
                RemoteConfig(protocol="tcp4", host="127.0.0.1", port=6514),
                SeverityLevel.INFO,
            )

    handler_cls.assert_called_once()
    assert exc_info.value.details["field"] == "syslog"
    assert exc_info.value.error_code == "CONFIG_SYSLOG_UNAVAILABLE"
