import logging
import re

import pytest

from cslogger.core.levels import NameDisplayMode
from cslogger.pipeline.formatting import (
    LineFormatter,
    apply_prefix,
    build_prefix,
    format_message,
    utc_timestamp,
)


class TestFormatMessage:
    def test_without_arguments_passes_through(self):
        assert format_message("100% done") == "100% done"

    def test_positional_substitution(self):
        assert format_message("aap %s noot %d mies", ("test", 24)) == "aap test noot 24 mies"

    def test_leftover_arguments_are_appended(self):
        assert format_message("test %d append", (123, "[some]")) == "test 123 append [some]"
        assert format_message("test another append", (0,)) == "test another append 0"

    def test_structured_values_render_as_json(self):
        message = format_message("test object append", ({"teun": 1, "toon": "august"},))
        assert message == 'test object append {"teun":1,"toon":"august"}'
        assert format_message("list", ([1, "a"],)) == 'list [1,"a"]'

    def test_json_placeholder(self):
        assert format_message("payload %j", ({"a": [1, 2]},)) == 'payload {"a":[1,2]}'

    def test_numeric_placeholders(self):
        assert format_message("%d/%i", ("7", "x")) == "7/NaN"
        assert format_message("%f", (1.5,)) == "1.5"

    def test_percent_escape_and_missing_arguments(self):
        assert format_message("%s%% of %s", (50,)) == "50% of %s"

    def test_non_string_format(self):
        assert format_message({"teun": 1}, ("x",)) == '{"teun":1} x'

    def test_unserializable_structures_fall_back_to_repr(self):
        assert format_message("obj", ({(1, 2): "a"},)) == "obj {(1, 2): 'a'}"

        looped = {"name": "loop"}
        looped["self"] = looped
        assert format_message("cycle %j", (looped,)) == f"cycle {looped!r}"


class TestPrefix:
    def test_no_prefix(self):
        assert build_prefix(NameDisplayMode.NONE, False, "mylog", "mymodule", 42) is None
        assert apply_prefix(None, "info") == "info"

    def test_pid_only(self):
        assert build_prefix(NameDisplayMode.NONE, True, "mylog", "mymodule", 42) == "#42"

    def test_simple_name(self):
        assert build_prefix(NameDisplayMode.SIMPLE, False, "mylog", "mymodule", 42) == "mymodule"

    def test_full_name(self):
        assert (
            build_prefix(NameDisplayMode.FULL, False, "mylog", "mymodule", 42)
            == "mylog.mymodule"
        )

    def test_pid_and_name(self):
        assert (
            build_prefix(NameDisplayMode.SIMPLE, True, "mylog", "mymodule", 42)
            == "#42-mymodule"
        )
        assert (
            build_prefix(NameDisplayMode.FULL, True, "mylog", "mymodule", 42)
            == "#42-mylog.mymodule"
        )

    def test_apply_prefix(self):
        assert apply_prefix("#42-mymodule", "info") == "[#42-mymodule] info"

    def test_apply_prefix_renders_structured_values(self):
        assert apply_prefix("mymodule", {"a": 1}) == '[mymodule] {"a":1}'


def _record(message: str, severity: str = "info") -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)
    record.severity = severity
    return record


class TestLineFormatter:
    def test_without_timestamp(self):
        assert LineFormatter(timestamp=False).format(_record("[m] hello")) == "info: [m] hello"

    def test_with_timestamp(self):
        line = LineFormatter(timestamp=True).format(_record("[m] hello", "warn"))
        assert re.fullmatch(r"\d{8}-\d{6}\.\d{3} - warn: \[m\] hello", line)

    def test_falls_back_to_levelname(self):
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        assert LineFormatter(timestamp=False).format(record) == "error: boom"

    @pytest.mark.parametrize(
        "created,expected",
        [(0.0, "19700101-000000.000"), (1760875200.123, "20251019-120000.123")],
    )
    def test_utc_timestamp(self, created, expected):
        assert utc_timestamp(created) == expected
