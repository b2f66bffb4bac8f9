"""
Severity levels and their name/rank codec.

Ranks grow as severity drops: ``fatal`` is 0 and ``trace`` is 50. Lookups
never fail; anything unrecognised resolves to ``trace``.

Example:
    >>> rank_of("WARN")
    <SeverityLevel.WARN: 20>
    >>> name_of(SeverityLevel.DEBUG)
    'debug'
    >>> rank_of("verbose")
    <SeverityLevel.TRACE: 50>
"""

import logging
from enum import Enum, IntEnum
from typing import Any, Dict


class SeverityLevel(IntEnum):
    """Severity ranks, most severe first"""

    FATAL = 0
    ERROR = 10
    WARN = 20
    INFO = 30
    DEBUG = 40
    TRACE = 50


class NameDisplayMode(Enum):
    """How the module name is rendered in the line prefix"""

    NONE = 0
    SIMPLE = 1
    FULL = 2


DEFAULT_LEVEL_NAME = "info"

_BY_NAME: Dict[str, SeverityLevel] = {
    level.name.lower(): level for level in SeverityLevel
}

# Numeric levels handed to the stdlib logging backend
STDLIB_LEVELS: Dict[SeverityLevel, int] = {
    SeverityLevel.FATAL: logging.CRITICAL,
    SeverityLevel.ERROR: logging.ERROR,
    SeverityLevel.WARN: logging.WARNING,
    SeverityLevel.INFO: logging.INFO,
    SeverityLevel.DEBUG: logging.DEBUG,
    SeverityLevel.TRACE: 5,
}


def rank_of(name: Any) -> SeverityLevel:
    """
    Translate a level name to its rank, case-insensitively.

    Unknown names, non-string values and ``None`` all resolve to
    ``SeverityLevel.TRACE``.
    """
    if isinstance(name, SeverityLevel):
        return name
    if not isinstance(name, str):
        return SeverityLevel.TRACE
    return _BY_NAME.get(name.strip().lower(), SeverityLevel.TRACE)


def name_of(rank: Any) -> str:
    """Translate a rank back to its lowercase name; unknown ranks give ``trace``"""
    try:
        return SeverityLevel(rank).name.lower()
    except ValueError:
        return "trace"


def to_stdlib_level(rank: SeverityLevel) -> int:
    return STDLIB_LEVELS[rank_of(name_of(rank))]
