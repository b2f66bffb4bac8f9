"""
cslogger pipeline - registry, named loggers, formatting and shutdown
"""

from .named_logger import NamedLogger
from .registry import LifecycleState, Pipeline, PipelineRegistry
from .shutdown import ShutdownCoordinator

__all__ = [
    "PipelineRegistry",
    "Pipeline",
    "LifecycleState",
    "NamedLogger",
    "ShutdownCoordinator",
]
