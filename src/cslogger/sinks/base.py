"""
Sink record shared by every destination type.

A sink is a plain record: which kind of destination it is, the validated
config it was built from, the level it accepts, and the stdlib handler that
performs the actual I/O. Destination specific behaviour lives entirely in
the handler; the pipeline only ever talks to this record.

Sink Lifecycle:
    1. Built by SinkFactory from a validated destination config
    2. Attached to the pipeline's backend logger as a handler
    3. Receives every accepted record at or above its level
    4. Flushed and closed on shutdown (or closed on deinit)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from cslogger.core.levels import SeverityLevel, name_of, to_stdlib_level
from cslogger.core.logging.logger import get_logger

logger = get_logger(__name__)


class SinkKind(Enum):
    """Supported destination types, in pipeline build order"""

    CONSOLE = "console"
    FILE = "file"
    REMOTE = "remote"


@dataclass
class Sink:
    """
    Constructed output destination.

    Attributes:
        kind: Destination type
        config: Validated destination config the sink was built from
        level: Least severe rank this sink accepts
        handler: Stdlib handler performing the writes
    """

    kind: SinkKind
    config: Any
    level: SeverityLevel
    handler: logging.Handler

    def __post_init__(self) -> None:
        self.handler.setLevel(to_stdlib_level(self.level))

    @property
    def level_name(self) -> str:
        return name_of(self.level)

    def accepts(self, rank: SeverityLevel) -> bool:
        return self.level >= rank

    def flush(self) -> None:
        self.handler.flush()

    def close(self) -> None:
        """Flush pending output and release the destination"""
        self.handler.flush()
        self.handler.close()
        logger.debug("Sink closed", sink=self.kind.value)

    def discard(self) -> None:
        """Release the destination without waiting for anything"""
        self.handler.close()
