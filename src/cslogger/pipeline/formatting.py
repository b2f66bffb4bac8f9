"""
Line rendering for cslogger.

Three pieces of text make up every line a sink writes:

    [timestamp - ]<level>: [<prefix>] <message>

- ``build_prefix`` decides the bracketed ``#<pid>`` / module name addon
- ``format_message`` substitutes positional arguments into the format
  string and appends what is left over
- ``LineFormatter`` is the stdlib formatter sinks use to add the level name
  and the optional UTC timestamp

Message Formatting:
    ``%s %d %i %f %j %o %O %%`` consume arguments in order. Arguments not
    consumed by a placeholder are appended, separated by spaces. Structured
    values (dicts, lists, tuples, sets) are rendered as compact JSON.

Example:
    >>> format_message("aap %s noot %d mies", ("test", 24))
    'aap test noot 24 mies'
    >>> format_message("object", ({"teun": 1},))
    'object {"teun":1}'
    >>> build_prefix(NameDisplayMode.FULL, False, "mylog", "db", 42)
    'mylog.db'
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from cslogger.core.levels import NameDisplayMode

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"

_PLACEHOLDER = re.compile(r"%[sdifjoO%]")
_STRUCTURED = (dict, list, tuple, set, frozenset)


def to_json(value: Any) -> str:
    """Canonical compact JSON for structured values"""
    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=repr)
    try:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, default=str
        )
    except (TypeError, ValueError):
        # Non-string keys or circular references
        return repr(value)


def render_value(value: Any) -> str:
    if isinstance(value, _STRUCTURED):
        return to_json(value)
    return str(value)


def _render_integer(value: Any) -> str:
    try:
        return str(int(value))
    except (TypeError, ValueError):
        return "NaN"


def _render_float(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "NaN"
    return str(int(number)) if number.is_integer() else str(number)


def format_message(fmt: Any, args: Sequence[Any] = ()) -> str:
    """
    Render a format string and its positional arguments into one message.

    Args:
        fmt: Format string; non-strings are rendered like extra arguments
        args: Positional arguments

    Returns:
        str: The rendered message
    """
    if not isinstance(fmt, str):
        return " ".join(render_value(value) for value in (fmt, *args))
    if not args:
        return fmt

    remaining = list(args)

    def substitute(match: "re.Match[str]") -> str:
        token = match.group(0)
        if token == "%%":
            return "%"
        if not remaining:
            return token

        value = remaining.pop(0)
        if token in ("%d", "%i"):
            return _render_integer(value)
        if token == "%f":
            return _render_float(value)
        if token in ("%j", "%o", "%O"):
            return to_json(value)
        return render_value(value)

    message = _PLACEHOLDER.sub(substitute, fmt)
    if remaining:
        message = " ".join([message, *(render_value(value) for value in remaining)])
    return message


def build_prefix(
    show_name: NameDisplayMode,
    show_pid: bool,
    app_name: str,
    module_name: str,
    pid: int,
) -> Optional[str]:
    """
    Build the text that goes between the brackets, or None for no prefix.

    Examples of results: ``#1234``, ``mymodule``, ``#1234-mylog.mymodule``.
    """
    if show_name is NameDisplayMode.NONE and not show_pid:
        return None

    addon = ""
    if show_pid:
        addon += f"#{pid}"
    if show_name is not NameDisplayMode.NONE:
        if show_pid:
            addon += "-"
        if show_name is NameDisplayMode.FULL:
            addon += f"{app_name}.{module_name}"
        else:
            addon += module_name
    return addon


def apply_prefix(prefix: Optional[str], fmt: Any) -> Any:
    if prefix is None:
        return fmt
    if not isinstance(fmt, str):
        fmt = render_value(fmt)
    return f"[{prefix}] {fmt}"


def utc_timestamp(created: float) -> str:
    """Render a record time as ``YYYYMMDD-HHmmss.SSS`` in UTC"""
    moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return f"{moment.strftime(TIMESTAMP_FORMAT)}.{moment.microsecond // 1000:03d}"


class LineFormatter(logging.Formatter):
    """
    Stdlib formatter producing ``[timestamp - ]<level>: <message>``.

    The level name comes from the record's ``severity`` attribute set by the
    pipeline; records from elsewhere fall back to their lowercased
    ``levelname``.
    """

    def __init__(self, timestamp: bool = True) -> None:
        super().__init__()
        self.timestamp = timestamp

    def format(self, record: logging.LogRecord) -> str:
        head = self.format_head(record)
        return f"{head}{severity_name(record)}: {record.getMessage()}"

    def format_head(self, record: logging.LogRecord) -> str:
        if not self.timestamp:
            return ""
        return f"{utc_timestamp(record.created)} - "


def severity_name(record: logging.LogRecord) -> str:
    return getattr(record, "severity", record.levelname.lower())
