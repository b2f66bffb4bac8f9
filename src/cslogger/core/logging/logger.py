"""
Structured diagnostics for cslogger itself.

cslogger is a logging facility, so its own lifecycle messages (pipeline
ready, repeated init ignored, sink failed to close) must not go through the
pipeline they describe. They are emitted through structlog bound loggers
wrapping standard library loggers under the ``cslogger`` namespace, which
leaves the host application in charge of where they end up.

Functions:
    get_logger(name): Structured logger for a cslogger module
    setup_logging(): Root handler configuration, used by the CLI only

Configuration:
    - CSLOGGER_LOG_FORMAT: Renderer for diagnostics (json/text)
    - CSLOGGER_DEBUG: Rich console handler at DEBUG level in the CLI

Example:
    >>> from cslogger.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Pipeline ready", sinks=2, transport_level="debug")

The library never configures global logging on import; nothing is printed
unless the host application (or the CLI) installs handlers, apart from the
standard library's last-resort output for warnings.
"""

import logging
import sys
from typing import Any, List

import structlog
from rich.console import Console
from rich.logging import RichHandler

from cslogger.core.config.settings import get_environment_settings
from cslogger.core.exceptions.custom_exceptions import ConfigurationError


def _log_format() -> str:
    # Invalid variables are reported by init() and the CLI, not on import
    try:
        return get_environment_settings().LOG_FORMAT
    except ConfigurationError:
        return "text"


def _processors() -> List[Any]:
    processors: List[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if _log_format() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def setup_logging() -> None:
    """
    Install root handlers for command line use.

    With ``CSLOGGER_DEBUG`` set, diagnostics go to a rich console handler on
    stderr at DEBUG level; otherwise to a plain stderr stream handler at
    WARNING level.

    Raises:
        ConfigurationError: If a ``CSLOGGER_*`` variable is invalid
    """
    environment = get_environment_settings()

    if environment.DEBUG:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        level = logging.DEBUG
    else:
        handler = logging.StreamHandler(sys.stderr)
        level = logging.WARNING

    handler.setLevel(level)
    logging.basicConfig(level=level, handlers=[handler], format="%(message)s")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured diagnostics logger.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.stdlib.BoundLogger: Logger bound to the stdlib logger of
        the same name
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )
