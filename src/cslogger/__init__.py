"""
cslogger - Process-wide logging facade with per-module levels.

cslogger gives every module of an application a named logger with six
severities, filters each call against a per-module level before any
formatting happens, and writes accepted lines to one or more shared
destinations.

Key Features:
    - Six severities: fatal, error, warn, info, debug, trace
    - Global level with per-module overrides
    - Cheap ``is_*`` predicates to skip building expensive arguments
    - Optional ``[#<pid>-<app>.<module>]`` line prefixes
    - Console, rotating file and syslog-like remote destinations
    - Idempotent one-time initialization and graceful async shutdown

Modules:
    core: Levels, configuration, exceptions and internal diagnostics
    sinks: Destination handlers and the factory building them
    pipeline: Registry, named loggers, formatting and shutdown
    cli: Command line tool for checking configurations

Example:
    >>> import cslogger
    >>> cslogger.init({
    ...     "name": "myapp",
    ...     "level": "info",
    ...     "levels": {"db": "debug"},
    ...     "showName": "full",
    ...     "console": {"timestamp": False},
    ... })
    >>> log = cslogger.create_logger("db")
    >>> log.debug("connected to %s", "primary")
    debug: [myapp.db] connected to primary
    >>> cslogger.shutdown()
"""

__version__ = "1.2.0"
__author__ = "Connection Systems"
__description__ = (
    "Process-wide logging facade with named loggers, per-module severity "
    "filtering and console, rotating file and syslog destinations."
)

from typing import Any, Callable, Mapping, Optional, Union

from cslogger.core.config.settings import LoggerSettings
from cslogger.core.exceptions.custom_exceptions import (
    ConfigurationError,
    CsLoggerError,
    NotInitializedError,
    ShutdownTimeoutError,
)
from cslogger.core.levels import NameDisplayMode, SeverityLevel
from cslogger.pipeline.named_logger import NamedLogger
from cslogger.pipeline.registry import LifecycleState, PipelineRegistry

registry = PipelineRegistry()


def init(settings: Union[LoggerSettings, Mapping[str, Any], None] = None) -> None:
    """Initialize the shared pipeline; later calls are ignored"""
    registry.init(settings)


def deinit() -> None:
    """Drop the shared pipeline immediately (test isolation)"""
    registry.deinit()


def create_logger(name: str) -> NamedLogger:
    """Create a logger for the named module"""
    return registry.create_logger(name)


def shutdown(
    callback: Optional[Callable[[], Any]] = None, timeout: Optional[float] = None
):
    """Flush and close every sink, then call ``callback``"""
    return registry.shutdown(callback=callback, timeout=timeout)


async def ashutdown(timeout: Optional[float] = None) -> None:
    """Flush and close every sink, awaiting completion"""
    await registry.ashutdown(timeout=timeout)


__all__ = [
    "init",
    "deinit",
    "create_logger",
    "shutdown",
    "ashutdown",
    "registry",
    "PipelineRegistry",
    "LifecycleState",
    "NamedLogger",
    "LoggerSettings",
    "SeverityLevel",
    "NameDisplayMode",
    "CsLoggerError",
    "ConfigurationError",
    "NotInitializedError",
    "ShutdownTimeoutError",
]
