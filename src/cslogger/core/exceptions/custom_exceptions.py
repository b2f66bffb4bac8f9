"""
Exception hierarchy for cslogger error handling.

This module defines the small set of exceptions the logging facility raises.
Each exception carries a human-readable message, a machine-readable error
code and a details dictionary so callers can report configuration problems
precisely.

Exception Hierarchy:
    CsLoggerError (base)
    ├── ConfigurationError: Malformed settings or unusable destination
    ├── NotInitializedError: Logging attempted without a ready pipeline
    └── ShutdownTimeoutError: Sinks did not finish draining in time

Unknown level names are deliberately not an error: they resolve to the
least severe level (trace).

Example:
    >>> try:
    ...     cslogger.init({"syslog": {"protocol": "carrier-pigeon"}})
    ... except ConfigurationError as e:
    ...     print(e.details["field"])
    syslog.protocol
"""

from typing import Any, Dict, Optional


class CsLoggerError(Exception):
    """
    Base exception class for all cslogger errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier, defaults to the
            class name
        details (Dict[str, Any]): Additional contextual information, such as
            the offending configuration field

    Example:
        >>> raise CsLoggerError(
        ...     "Sink could not be opened",
        ...     error_code="SINK_OPEN_ERROR",
        ...     details={"path": "/var/log/app.log"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(CsLoggerError):
    """
    Raised when logger settings or a destination config cannot be used.

    Raised synchronously from ``init``; pipeline construction is aborted and
    no partial pipeline is installed. ``details["field"]`` names the dotted
    configuration key at fault (e.g. ``"syslog.protocol"``).

    Common scenarios:
        - Unsupported remote protocol, framing type or facility
        - Values of the wrong type (e.g. ``file.rollingFile.maxSize: "big"``)
        - Destination that cannot be opened (missing directory, refused
          socket)
    """

    pass


class NotInitializedError(CsLoggerError):
    """
    Raised when a logger is used while no pipeline is ready.

    Every severity method and every ``is_*`` predicate raises this until
    ``init`` has completed, and again after ``shutdown`` or ``deinit``.
    """

    def __init__(
        self,
        message: str = "Log system is not initialized",
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code=error_code, details=details)


class ShutdownTimeoutError(CsLoggerError):
    """Raised when sinks do not report completion within the shutdown bound"""

    pass
