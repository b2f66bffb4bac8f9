"""
Syslog-like remote destination.

Built on the stdlib ``SysLogHandler`` with two changes: the cslogger
severities are mapped onto syslog priorities, and the message body carries
a proper header in one of the supported framings:

    BSD / RFC3164  <PRI>Oct 19 12:00:00 host app[pid]: message
    RFC5424        <PRI>1 2026-10-19T12:00:00.123Z host app pid - - message
    RFC5425        <PRI>1 2026-10-19T12:00:00.123456Z host app pid - - message

RFC5425 is the default for its high resolution timestamps. The syslog
header supplies the time, so the line itself never carries a local
timestamp.

Protocols:
    udp4, udp6, udp  Datagrams to host:port (default localhost:514)
    tcp4, tcp6, tcp  Stream connection to host:port
    unix, unix-connect  Local socket at ``path`` (default /dev/log)
"""

import logging
import os
import socket
from datetime import datetime, timezone
from logging.handlers import SysLogHandler
from typing import Dict, Optional, Tuple, Union

from cslogger.pipeline.formatting import severity_name

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 514
DEFAULT_UNIX_PATH = "/dev/log"

PROTOCOLS: Dict[str, Optional[int]] = {
    "udp4": socket.SOCK_DGRAM,
    "udp6": socket.SOCK_DGRAM,
    "udp": socket.SOCK_DGRAM,
    "tcp4": socket.SOCK_STREAM,
    "tcp6": socket.SOCK_STREAM,
    "tcp": socket.SOCK_STREAM,
    "unix": None,
    "unix-connect": None,
}

FRAMING_TYPES = ("BSD", "RFC3164", "RFC5424", "RFC5425")

# cslogger severity -> syslog priority name
SEVERITY_PRIORITIES: Dict[str, str] = {
    "fatal": "crit",
    "error": "error",
    "warn": "warning",
    "info": "info",
}


def is_unix(protocol: str) -> bool:
    return protocol.startswith("unix")


class MappedSyslogHandler(SysLogHandler):
    """
    SysLogHandler speaking cslogger severities.

    Args:
        address: ``(host, port)`` or a unix socket path
        facility: Facility name, e.g. ``"local0"``
        socktype: Socket type, None to probe for unix sockets
        framing: One of FRAMING_TYPES
        app_name: Application name for the header
        localhost: Host name for the header
    """

    def __init__(
        self,
        address: Union[Tuple[str, int], str],
        facility: str,
        socktype: Optional[int],
        framing: str,
        app_name: str,
        localhost: str,
    ) -> None:
        super().__init__(address=address, facility=facility, socktype=socktype)
        self.framing = framing
        self.append_nul = framing in ("BSD", "RFC3164")
        self.app_name = app_name
        self.localhost = localhost
        self.pid = os.getpid()
        self._current_severity = "debug"

    def mapPriority(self, levelName: str) -> str:
        return SEVERITY_PRIORITIES.get(self._current_severity, "debug")

    def emit(self, record: logging.LogRecord) -> None:
        self._current_severity = severity_name(record)
        super().emit(record)

    def format(self, record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created, tz=timezone.utc)
        message = record.getMessage()

        if self.framing in ("BSD", "RFC3164"):
            stamp = f"{moment:%b} {moment.day:>2} {moment:%H:%M:%S}"
            return f"{stamp} {self.localhost} {self.app_name}[{self.pid}]: {message}"

        timespec = "microseconds" if self.framing == "RFC5425" else "milliseconds"
        stamp = moment.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"
        return (
            f"1 {stamp} {self.localhost} {self.app_name} {self.pid} - - {message}"
        )
