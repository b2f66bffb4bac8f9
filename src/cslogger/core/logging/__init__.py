"""
cslogger diagnostics - structured logging about the logging facility itself.

Lifecycle events of the pipeline (initialization, ignored re-initialization,
sink construction, draining) are reported through structlog loggers in the
``cslogger`` namespace. They never pass through the pipeline they describe.

Example:
    >>> import logging
    >>> logging.basicConfig(level=logging.DEBUG)
    >>> import cslogger
    >>> cslogger.init({"level": "debug"})  # "Log system initialized" appears
"""
