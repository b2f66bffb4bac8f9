"""
Level and display resolution for cslogger.

Merges the global level with the per-module overrides into the two numbers
the pipeline works with: the transport level (the loosest level any module
needs, applied once for every sink) and each logger's effective level.

Functions:
    resolve_effective_level(): Level a named logger filters at
    resolve_transport_level(): Loosest level across global and module levels
    resolve_show_name(): Interpret the ``showName`` setting
    resolve_settings(): Build the immutable GlobalSettings for a pipeline

Example:
    >>> levels = {"db": SeverityLevel.ERROR, "http": SeverityLevel.DEBUG}
    >>> resolve_transport_level(SeverityLevel.INFO, levels)
    <SeverityLevel.DEBUG: 40>
    >>> resolve_effective_level("db", SeverityLevel.INFO, levels)
    <SeverityLevel.ERROR: 10>
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from cslogger.core.config.settings import (
    ConsoleConfig,
    FileConfig,
    LoggerSettings,
    RemoteConfig,
)
from cslogger.core.levels import NameDisplayMode, SeverityLevel, rank_of


def resolve_effective_level(
    module_name: str,
    default_level: SeverityLevel,
    module_levels: Mapping[str, SeverityLevel],
) -> SeverityLevel:
    """Return the module's override when present, else the default level"""
    return module_levels.get(module_name, default_level)


def resolve_transport_level(
    default_level: SeverityLevel, module_levels: Mapping[str, SeverityLevel]
) -> SeverityLevel:
    """
    Return the least severe level among the default and every override.

    The shared filter in front of all sinks must let through everything the
    most verbose module asks for; stricter modules are filtered by their own
    logger.
    """
    return max([default_level, *module_levels.values()])


def resolve_show_name(value: Any) -> NameDisplayMode:
    """
    Translate the ``showName`` setting.

    ``"full"`` gives FULL, ``"none"``/``"false"`` give NONE, any other
    string gives SIMPLE. Non-strings follow their truthiness.
    """
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "full":
            return NameDisplayMode.FULL
        if lowered in ("none", "false"):
            return NameDisplayMode.NONE
        return NameDisplayMode.SIMPLE
    return NameDisplayMode.SIMPLE if value else NameDisplayMode.NONE


@dataclass(frozen=True)
class GlobalSettings:
    """
    Resolved, immutable settings owned by one pipeline.

    Attributes:
        app_name: Application name
        default_level: Level for modules without an override
        module_levels: Read-only per-module overrides
        transport_level: Loosest level across all of the above
        show_name: Name display mode
        show_pid: Whether lines are prefixed with ``#<pid>``
        console / file / remote: Destination configs, None when omitted
    """

    app_name: str
    default_level: SeverityLevel
    transport_level: SeverityLevel
    show_name: NameDisplayMode
    show_pid: bool
    module_levels: Mapping[str, SeverityLevel] = field(
        default_factory=lambda: MappingProxyType({})
    )
    console: Optional[ConsoleConfig] = None
    file: Optional[FileConfig] = None
    remote: Optional[RemoteConfig] = None

    def effective_level(self, module_name: str) -> SeverityLevel:
        return resolve_effective_level(
            module_name, self.default_level, self.module_levels
        )


def resolve_settings(settings: LoggerSettings) -> GlobalSettings:
    """Resolve validated caller settings into a GlobalSettings"""
    default_level = rank_of(settings.level)
    module_levels = {
        module: rank_of(level) for module, level in settings.levels.items()
    }

    return GlobalSettings(
        app_name=settings.name,
        default_level=default_level,
        transport_level=resolve_transport_level(default_level, module_levels),
        show_name=resolve_show_name(settings.show_name),
        show_pid=settings.show_pid,
        module_levels=MappingProxyType(module_levels),
        console=settings.console,
        file=settings.file,
        remote=settings.syslog,
    )
