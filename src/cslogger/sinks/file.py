"""
File destination with optional size based rotation.

Without a ``rollingFile`` section lines are appended to one file. With it,
the primary file is rotated once it would grow past ``maxSize`` bytes and
older content moves to numbered siblings inserted before the extension:

    app.log   (newest)
    app1.log
    app2.log
    ...
    app<maxFiles - 1>.log   (oldest)

Colorize is accepted for symmetry with the console but never changes the
bytes written to disk.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from cslogger.core.config.settings import FileConfig
from cslogger.core.logging.logger import get_logger
from cslogger.pipeline.formatting import LineFormatter

logger = get_logger(__name__)


def numbered_name(default_name: str) -> str:
    """Map the stdlib rotation name ``app.log.3`` onto ``app3.log``"""
    base, _, index = default_name.rpartition(".")
    if not index.isdigit():
        return default_name
    root, ext = os.path.splitext(base)
    return f"{root}{index}{ext}"


def create_file_handler(config: FileConfig) -> logging.Handler:
    """
    Open the configured log file.

    Raises:
        OSError: If the file cannot be opened
    """
    path = Path(config.path)
    rolling = config.rolling_file

    if rolling is None:
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        if not rolling.tailable:
            logger.warning(
                "Non-tailable rotation is not supported, rotating tailable",
                path=str(path),
            )
        rotating = RotatingFileHandler(
            path,
            maxBytes=rolling.max_size,
            backupCount=max(rolling.max_files - 1, 0),
            encoding="utf-8",
        )
        rotating.namer = numbered_name
        handler = rotating

    handler.setFormatter(LineFormatter(timestamp=config.timestamp))
    return handler
