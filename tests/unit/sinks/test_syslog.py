import logging
import re
import socket

import pytest

from cslogger.sinks.syslog import MappedSyslogHandler


@pytest.fixture
def udp_server():
    server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    server.bind(("127.0.0.1", 0))
    server.settimeout(5)
    yield server
    server.close()


def _handler(server, framing="RFC5425"):
    return MappedSyslogHandler(
        address=server.getsockname(),
        facility="local0",
        socktype=socket.SOCK_DGRAM,
        framing=framing,
        app_name="mylog",
        localhost="testhost",
    )


def _emit(handler, message, severity, level=logging.INFO):
    record = logging.LogRecord("x", level, __file__, 1, message, None, None)
    record.severity = severity
    handler.handle(record)


def test_rfc5425_datagram(udp_server):
    handler = _handler(udp_server)
    try:
        _emit(handler, "[mymodule] hello", "info")
        data = udp_server.recv(4096).decode("utf-8")
    finally:
        handler.close()

    # local0 (16) * 8 + info (6)
    assert re.fullmatch(
        r"<134>1 \d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{6}Z testhost mylog \d+ - - "
        r"\[mymodule\] hello",
        data,
    )


@pytest.mark.parametrize(
    "severity,priority",
    [("fatal", 130), ("error", 131), ("warn", 132), ("info", 134), ("debug", 135), ("trace", 135)],
)
def test_severity_mapping(udp_server, severity, priority):
    handler = _handler(udp_server, framing="RFC5424")
    try:
        _emit(handler, "msg", severity)
        data = udp_server.recv(4096).decode("utf-8")
    finally:
        handler.close()

    assert data.startswith(f"<{priority}>1 ")
    assert re.search(r"T\d\d:\d\d:\d\d\.\d{3}Z ", data)


def test_bsd_framing(udp_server):
    handler = _handler(udp_server, framing="BSD")
    try:
        _emit(handler, "hello", "warn")
        data = udp_server.recv(4096).decode("utf-8")
    finally:
        handler.close()

    assert re.fullmatch(
        r"<132>[A-Z][a-z]{2} [ \d]\d \d\d:\d\d:\d\d testhost mylog\[\d+\]: hello\x00",
        data,
    )
