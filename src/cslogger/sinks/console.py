"""
Console destination.

Colored output goes through a rich Console so terminals get styled level
names and redirected output gets plain text. Without colorize a plain stdlib
stream handler on stdout is used.
"""

import logging
import sys
from typing import Dict, Optional

from rich.console import Console
from rich.text import Text

from cslogger.core.config.settings import ConsoleConfig
from cslogger.pipeline.formatting import LineFormatter, severity_name

LEVEL_STYLES: Dict[str, str] = {
    "fatal": "magenta",
    "error": "red",
    "warn": "yellow",
    "info": "green",
    "debug": "blue",
    "trace": "grey50",
}


class RichConsoleHandler(logging.Handler):
    """Handler printing lines through rich with a styled level name"""

    def __init__(
        self, formatter: LineFormatter, console: Optional[Console] = None
    ) -> None:
        super().__init__()
        self.setFormatter(formatter)
        self.line_formatter = formatter
        self.console = console or Console(highlight=False)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = severity_name(record)
            line = Text.assemble(
                self.line_formatter.format_head(record),
                (level, LEVEL_STYLES.get(level, "")),
                f": {record.getMessage()}",
            )
            self.console.print(line, soft_wrap=True, highlight=False)
        except Exception:
            self.handleError(record)


def create_console_handler(config: ConsoleConfig) -> logging.Handler:
    formatter = LineFormatter(timestamp=config.timestamp)
    if config.colorize:
        return RichConsoleHandler(formatter)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    return handler
