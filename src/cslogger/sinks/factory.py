"""
Sink construction for cslogger pipelines.

SinkFactory turns validated destination configs into Sink records. It is
the only place that knows how each destination type maps onto a stdlib
handler, and the place where destination problems become
ConfigurationError with the offending field named.

Build Order:
    console, then file, then remote; omitted destinations are skipped.

Failure Handling:
    If any destination cannot be built, every sink already built for the
    same pipeline is closed before the error propagates, so a failed init
    leaves nothing open behind it.

Example:
    >>> factory = SinkFactory(app_name="mylog")
    >>> sink = factory.build_file_sink(FileConfig(path="/tmp/app.log"),
    ...                                SeverityLevel.DEBUG)
    >>> sink.level_name
    'debug'
"""

import socket
from logging.handlers import SysLogHandler
from typing import List, Optional

from cslogger.core.config.resolver import GlobalSettings
from cslogger.core.config.settings import ConsoleConfig, FileConfig, RemoteConfig
from cslogger.core.exceptions.custom_exceptions import ConfigurationError
from cslogger.core.levels import SeverityLevel, rank_of
from cslogger.core.logging.logger import get_logger
from cslogger.sinks.base import Sink, SinkKind
from cslogger.sinks.console import create_console_handler
from cslogger.sinks.file import create_file_handler
from cslogger.sinks.syslog import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_UNIX_PATH,
    FRAMING_TYPES,
    PROTOCOLS,
    MappedSyslogHandler,
    is_unix,
)

logger = get_logger(__name__)


def sink_level(
    configured: Optional[str], transport_level: SeverityLevel
) -> SeverityLevel:
    """A destination level may tighten the transport level, never loosen it"""
    if not configured:
        return transport_level
    return min(rank_of(configured), transport_level)


class SinkFactory:
    """
    Builds sinks for one pipeline.

    Attributes:
        app_name: Application name, used in remote message headers
        hostname: Local host name for remote headers when no host is given
    """

    def __init__(self, app_name: str, hostname: Optional[str] = None) -> None:
        self.app_name = app_name
        self.hostname = hostname or socket.gethostname()

    def build_all(self, settings: GlobalSettings) -> List[Sink]:
        """
        Build every configured destination in declared order.

        Raises:
            ConfigurationError: If any destination is invalid or cannot be
                opened; sinks built so far are closed first
        """
        sinks: List[Sink] = []
        try:
            if settings.console is not None:
                sinks.append(
                    self.build_console_sink(settings.console, settings.transport_level)
                )
            if settings.file is not None:
                sinks.append(
                    self.build_file_sink(settings.file, settings.transport_level)
                )
            if settings.remote is not None:
                sinks.append(
                    self.build_remote_sink(settings.remote, settings.transport_level)
                )
        except ConfigurationError:
            for sink in sinks:
                sink.discard()
            raise
        return sinks

    def build_console_sink(
        self, config: ConsoleConfig, transport_level: SeverityLevel
    ) -> Sink:
        return Sink(
            kind=SinkKind.CONSOLE,
            config=config,
            level=sink_level(config.level, transport_level),
            handler=create_console_handler(config),
        )

    def build_file_sink(self, config: FileConfig, transport_level: SeverityLevel) -> Sink:
        """
        Build the file sink.

        Raises:
            ConfigurationError: If the file cannot be opened (field
                ``file.path``)
        """
        try:
            handler = create_file_handler(config)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot open log file '{config.path}': {e}",
                error_code="CONFIG_FILE_UNAVAILABLE",
                details={"field": "file.path", "path": config.path},
            ) from e

        return Sink(
            kind=SinkKind.FILE,
            config=config,
            level=sink_level(config.level, transport_level),
            handler=handler,
        )

    def build_remote_sink(
        self, config: RemoteConfig, transport_level: SeverityLevel
    ) -> Sink:
        """
        Build the syslog-like remote sink.

        Raises:
            ConfigurationError: For an unsupported protocol, framing type or
                facility, or when the socket cannot be opened
        """
        protocol = config.protocol.lower()
        if protocol not in PROTOCOLS:
            raise ConfigurationError(
                f"Unsupported syslog protocol '{config.protocol}'",
                error_code="CONFIG_UNSUPPORTED_PROTOCOL",
                details={"field": "syslog.protocol", "supported": list(PROTOCOLS)},
            )

        framing = config.type.upper()
        if framing not in FRAMING_TYPES:
            raise ConfigurationError(
                f"Unsupported syslog type '{config.type}'",
                error_code="CONFIG_UNSUPPORTED_SYSLOG_TYPE",
                details={"field": "syslog.type", "supported": list(FRAMING_TYPES)},
            )

        facility = config.facility.lower()
        if facility not in SysLogHandler.facility_names:
            raise ConfigurationError(
                f"Unknown syslog facility '{config.facility}'",
                error_code="CONFIG_UNKNOWN_FACILITY",
                details={"field": "syslog.facility"},
            )

        if is_unix(protocol):
            address = config.path or DEFAULT_UNIX_PATH
        else:
            address = (config.host or DEFAULT_HOST, config.port or DEFAULT_PORT)

        try:
            handler = MappedSyslogHandler(
                address=address,
                facility=facility,
                socktype=PROTOCOLS[protocol],
                framing=framing,
                app_name=self.app_name,
                localhost=config.host or self.hostname,
            )
        except OSError as e:
            raise ConfigurationError(
                f"Cannot open syslog transport {address!r}: {e}",
                error_code="CONFIG_SYSLOG_UNAVAILABLE",
                details={"field": "syslog", "address": str(address)},
            ) from e

        logger.debug(
            "Remote sink built",
            protocol=protocol,
            framing=framing,
            address=str(address),
        )
        return Sink(
            kind=SinkKind.REMOTE,
            config=config,
            level=sink_level(config.level, transport_level),
            handler=handler,
        )
