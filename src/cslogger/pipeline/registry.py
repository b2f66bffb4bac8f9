"""
Pipeline lifecycle for cslogger.

PipelineRegistry owns at most one Pipeline: the resolved settings, the
constructed sinks and the backend that delivers lines to them. It is the
only object that creates, replaces or tears down a pipeline; named loggers
only look it up.

Lifecycle:
    UNINITIALIZED --init--> READY --shutdown--> DRAINING
          ^                   |                     |
          +------deinit-------+---------deinit------+

    - ``init`` on anything but UNINITIALIZED is silently ignored; later
      settings never merge into an active pipeline
    - ``shutdown`` flushes and closes every sink, optionally reporting
      completion through a callback
    - ``deinit`` drops the pipeline immediately and resets all derived
      state; intended for test isolation

Backend:
    Each pipeline owns a private stdlib ``logging.Logger`` (not registered
    with the logging manager) whose level is the transport level and whose
    handlers are the sinks. A structlog bound logger in front of it renders
    positional arguments and hands finished lines over.

Example:
    >>> registry = PipelineRegistry()
    >>> registry.init({"level": "debug", "console": {"timestamp": False}})
    >>> log = registry.create_logger("db")
    >>> log.debug("connected to %s", "primary")
    debug: connected to primary
    >>> registry.shutdown()
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

import structlog

from cslogger.core.config.resolver import (
    GlobalSettings,
    resolve_effective_level,
    resolve_settings,
)
from cslogger.core.config.settings import LoggerSettings, get_environment_settings
from cslogger.core.levels import (
    DEFAULT_LEVEL_NAME,
    SeverityLevel,
    name_of,
    rank_of,
    to_stdlib_level,
)
from cslogger.core.logging.logger import get_logger
from cslogger.pipeline.formatting import format_message
from cslogger.pipeline.named_logger import NamedLogger
from cslogger.pipeline.shutdown import ShutdownCoordinator
from cslogger.sinks.base import Sink
from cslogger.sinks.factory import SinkFactory

logger = get_logger(__name__)


class LifecycleState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DRAINING = "draining"


def render_positional_args(
    _: Any, __: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """structlog processor substituting positional arguments into the event"""
    args = event_dict.pop("positional_args", ())
    event_dict["event"] = format_message(event_dict["event"], args)
    return event_dict


def to_stdlib_call(
    _: Any, __: str, event_dict: Dict[str, Any]
) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
    """Final structlog processor: arguments for ``logging.Logger.log``"""
    rank = event_dict["severity"]
    return (
        (to_stdlib_level(rank), event_dict["event"]),
        {"extra": {"severity": name_of(rank)}},
    )


class PipelineBoundLogger(structlog.BoundLoggerBase):
    """structlog wrapper delivering leveled lines to the backend logger"""

    def emit(self, rank: SeverityLevel, message: Any, args: Sequence[Any] = ()) -> Any:
        return self._proxy_to_logger(
            "log", message, severity=rank, positional_args=tuple(args)
        )


def create_backend(
    app_name: str, transport_level: SeverityLevel, sinks: Sequence[Sink]
) -> PipelineBoundLogger:
    backend_logger = logging.Logger(f"cslogger.pipeline.{app_name}")
    backend_logger.propagate = False
    backend_logger.setLevel(to_stdlib_level(transport_level))

    for sink in sinks:
        backend_logger.addHandler(sink.handler)
    if not sinks:
        backend_logger.addHandler(logging.NullHandler())

    return structlog.wrap_logger(
        backend_logger,
        processors=[render_positional_args, to_stdlib_call],
        wrapper_class=PipelineBoundLogger,
        context_class=dict,
    ).bind()


@dataclass
class Pipeline:
    """
    The shared output pipeline.

    Attributes:
        settings: Resolved settings, read-only for the pipeline's lifetime
        sinks: Constructed sinks in build order
        backend: structlog wrapper around the backend logger
        state: READY until shutdown starts, then DRAINING
    """

    settings: GlobalSettings
    sinks: Tuple[Sink, ...]
    backend: PipelineBoundLogger
    state: LifecycleState = LifecycleState.READY

    @classmethod
    def assemble(cls, settings: GlobalSettings, sinks: Sequence[Sink]) -> "Pipeline":
        backend = create_backend(settings.app_name, settings.transport_level, sinks)
        return cls(settings=settings, sinks=tuple(sinks), backend=backend)

    @property
    def transport_level(self) -> SeverityLevel:
        return self.settings.transport_level

    def dispatch(self, rank: SeverityLevel, message: Any, args: Sequence[Any]) -> None:
        """Hand one accepted call to every sink that accepts its rank"""
        self.backend.emit(rank, message, args)


class PipelineRegistry:
    """
    Owner of the process-wide pipeline.

    Most applications use the module level functions of :mod:`cslogger`,
    which delegate to one shared registry. Tests and embedded uses can
    create their own registry and hand out loggers from it.

    Attributes:
        hostname: Host name for remote headers, defaults to the local one
    """

    def __init__(self, hostname: Optional[str] = None) -> None:
        self.hostname = hostname
        self._pipeline: Optional[Pipeline] = None
        self._default_level = rank_of(DEFAULT_LEVEL_NAME)
        self._module_levels: Dict[str, SeverityLevel] = {}
        self._drain_task: Optional["asyncio.Task[None]"] = None

    @property
    def pipeline(self) -> Optional[Pipeline]:
        return self._pipeline

    @property
    def state(self) -> LifecycleState:
        if self._pipeline is None:
            return LifecycleState.UNINITIALIZED
        return self._pipeline.state

    @property
    def is_ready(self) -> bool:
        return self.state is LifecycleState.READY

    def init(
        self, settings: Union[LoggerSettings, Mapping[str, Any], None] = None
    ) -> None:
        """
        Build and install the pipeline, once.

        Args:
            settings: Logger settings; None uses the process defaults
                (console output, level from ``CSLOGGER_LEVEL``)

        Raises:
            ConfigurationError: If settings or a destination are invalid;
                nothing is installed
        """
        if self._pipeline is not None:
            logger.debug("Log system already initialized, ignoring init")
            return

        if settings is None:
            parsed = get_environment_settings().default_logger_settings()
        else:
            parsed = LoggerSettings.parse(settings)

        resolved = resolve_settings(parsed)
        sinks = SinkFactory(resolved.app_name, hostname=self.hostname).build_all(
            resolved
        )

        self._pipeline = Pipeline.assemble(resolved, sinks)
        self._default_level = resolved.default_level
        self._module_levels = dict(resolved.module_levels)

        logger.debug(
            "Log system initialized",
            app_name=resolved.app_name,
            transport_level=name_of(resolved.transport_level),
            sinks=[sink.kind.value for sink in sinks],
        )

    def deinit(self) -> None:
        """
        Drop the pipeline immediately and reset every derived setting.

        A drain still running from ``shutdown`` is cancelled; its callback
        is not called.
        """
        pipeline = self._pipeline
        self._pipeline = None
        self._default_level = rank_of(DEFAULT_LEVEL_NAME)
        self._module_levels = {}

        drain_task, self._drain_task = self._drain_task, None
        if drain_task is not None and not drain_task.done():
            drain_task.cancel()

        if pipeline is not None:
            for sink in pipeline.sinks:
                sink.discard()

    def create_logger(self, name: str) -> NamedLogger:
        """
        Create a named logger.

        Always succeeds, also before ``init``; its level is fixed from the
        settings current at creation time.
        """
        level = resolve_effective_level(name, self._default_level, self._module_levels)
        return NamedLogger(name, level, self)

    async def ashutdown(self, timeout: Optional[float] = None) -> None:
        """
        Drain the pipeline: flush and close every sink.

        Returns immediately when there is no ready pipeline.

        Raises:
            ShutdownTimeoutError: If timeout passes before all sinks finish
        """
        pipeline = self._pipeline
        if pipeline is None or pipeline.state is not LifecycleState.READY:
            return

        pipeline.state = LifecycleState.DRAINING
        await ShutdownCoordinator(pipeline.sinks, timeout=timeout).drain()

    def shutdown(
        self,
        callback: Optional[Callable[[], Any]] = None,
        timeout: Optional[float] = None,
    ) -> Optional["asyncio.Task[None]"]:
        """
        Drain the pipeline, then call ``callback`` once.

        Outside an event loop this blocks until every sink is closed. Inside
        a running loop the drain is scheduled as a task which is returned;
        the callback fires when it completes successfully.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            asyncio.run(self.ashutdown(timeout))
            if callback is not None:
                callback()
            return None

        task = loop.create_task(self.ashutdown(timeout))
        self._drain_task = task

        def on_done(done: "asyncio.Task[None]") -> None:
            if done.cancelled():
                return
            error = done.exception()
            if error is not None:
                logger.error("Shutdown failed", error=str(error))
                return
            if callback is not None:
                callback()

        task.add_done_callback(on_done)
        return task
