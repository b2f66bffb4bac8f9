"""
cslogger sinks - console, file and syslog-like destinations
"""

from .base import Sink, SinkKind
from .factory import SinkFactory

__all__ = [
    "Sink",
    "SinkKind",
    "SinkFactory",
]
