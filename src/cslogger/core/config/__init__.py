"""
cslogger configuration: settings schema and level resolution
"""

from .resolver import (
    GlobalSettings,
    resolve_effective_level,
    resolve_settings,
    resolve_show_name,
    resolve_transport_level,
)
from .settings import (
    ConsoleConfig,
    EnvironmentSettings,
    FileConfig,
    LoggerSettings,
    RemoteConfig,
    RollingFileConfig,
)

__all__ = [
    "LoggerSettings",
    "ConsoleConfig",
    "FileConfig",
    "RollingFileConfig",
    "RemoteConfig",
    "EnvironmentSettings",
    "GlobalSettings",
    "resolve_settings",
    "resolve_effective_level",
    "resolve_transport_level",
    "resolve_show_name",
]
