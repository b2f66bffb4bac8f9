"""
Named loggers handed out to application modules.

A NamedLogger is cheap: a name, a fixed effective level, the process id and
a weak reference to the registry it came from. Every call is checked against
the effective level before anything is formatted, so a rejected call costs
one comparison. The ``is_*`` predicates expose the same check so callers can
skip building expensive arguments.

Example:
    >>> log = cslogger.create_logger("db")
    >>> if log.is_debug():
    ...     log.debug("query plan %j", explain(query))
    >>> log.info("connected to %s:%d", host, port)
"""

import os
import weakref
from typing import TYPE_CHECKING, Any, Optional, Tuple

from cslogger.core.exceptions.custom_exceptions import NotInitializedError
from cslogger.core.levels import SeverityLevel
from cslogger.pipeline.formatting import apply_prefix, build_prefix

if TYPE_CHECKING:
    from cslogger.pipeline.registry import Pipeline, PipelineRegistry


class NamedLogger:
    """
    Per-module logger bound to an effective level.

    Attributes:
        name: Module name shown in prefixes
        level: Effective level; calls less severe than this are dropped
        pid: Process id shown in ``#<pid>`` prefixes
    """

    __slots__ = ("name", "level", "pid", "_registry")

    def __init__(
        self,
        name: str,
        level: SeverityLevel,
        registry: "PipelineRegistry",
        pid: Optional[int] = None,
    ) -> None:
        self.name = name
        self.level = level
        self.pid = os.getpid() if pid is None else pid
        self._registry = weakref.ref(registry)

    def __repr__(self) -> str:
        return f"NamedLogger(name={self.name!r}, level={self.level.name.lower()!r})"

    def _ready_pipeline(self) -> "Pipeline":
        registry = self._registry()
        if registry is None or not registry.is_ready:
            raise NotInitializedError()
        return registry.pipeline

    def _is_to_log(self, rank: SeverityLevel) -> bool:
        self._ready_pipeline()
        return self.level >= rank

    def _log(self, rank: SeverityLevel, fmt: Any, args: Tuple[Any, ...]) -> None:
        pipeline = self._ready_pipeline()
        if self.level < rank:
            return

        settings = pipeline.settings
        prefix = build_prefix(
            settings.show_name,
            settings.show_pid,
            settings.app_name,
            self.name,
            self.pid,
        )
        pipeline.dispatch(rank, apply_prefix(prefix, fmt), args)

    def fatal(self, fmt: Any, *args: Any) -> None:
        self._log(SeverityLevel.FATAL, fmt, args)

    def error(self, fmt: Any, *args: Any) -> None:
        self._log(SeverityLevel.ERROR, fmt, args)

    def warn(self, fmt: Any, *args: Any) -> None:
        self._log(SeverityLevel.WARN, fmt, args)

    def info(self, fmt: Any, *args: Any) -> None:
        self._log(SeverityLevel.INFO, fmt, args)

    def debug(self, fmt: Any, *args: Any) -> None:
        self._log(SeverityLevel.DEBUG, fmt, args)

    def trace(self, fmt: Any, *args: Any) -> None:
        self._log(SeverityLevel.TRACE, fmt, args)

    def is_fatal(self) -> bool:
        return self._is_to_log(SeverityLevel.FATAL)

    def is_error(self) -> bool:
        return self._is_to_log(SeverityLevel.ERROR)

    def is_warn(self) -> bool:
        return self._is_to_log(SeverityLevel.WARN)

    def is_info(self) -> bool:
        return self._is_to_log(SeverityLevel.INFO)

    def is_debug(self) -> bool:
        return self._is_to_log(SeverityLevel.DEBUG)

    def is_trace(self) -> bool:
        return self._is_to_log(SeverityLevel.TRACE)
