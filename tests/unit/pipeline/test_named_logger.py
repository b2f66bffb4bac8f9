"""
Tests for NamedLogger
"""

import gc

import pytest

from cslogger.core.exceptions.custom_exceptions import NotInitializedError
from cslogger.core.levels import SeverityLevel
from cslogger.pipeline.named_logger import NamedLogger
from cslogger.pipeline.registry import PipelineRegistry


class TestNamedLogger:
    """Test named logger behaviour against a private registry"""

    def test_repr(self, registry):
        inst = registry.create_logger("db")
        assert repr(inst) == "NamedLogger(name='db', level='info')"

    def test_level_fixed_at_creation(self, registry):
        inst = registry.create_logger("db")
        assert inst.level is SeverityLevel.INFO

        registry.init({"level": "trace"})

        assert inst.level is SeverityLevel.INFO
        assert registry.create_logger("db").level is SeverityLevel.TRACE

    def test_pid_override_in_prefix(self, registry, log_file):
        registry.init(
            {
                "showPid": True,
                "showName": True,
                "file": {"path": str(log_file), "timestamp": False},
            }
        )
        inst = NamedLogger("worker", SeverityLevel.INFO, registry, pid=42)
        inst.info("started")

        assert log_file.read_text(encoding="utf-8") == "info: [#42-worker] started\n"

    def test_structured_message(self, registry, log_file):
        registry.init({"file": {"path": str(log_file), "timestamp": False}})
        inst = registry.create_logger("db")
        inst.info({"rows": 3})
        inst.warn(["a", "b"], "tail")

        assert log_file.read_text(encoding="utf-8") == (
            'info: {"rows":3}\n' 'warn: ["a","b"] tail\n'
        )

    def test_placeholders(self, registry, log_file):
        registry.init({"file": {"path": str(log_file), "timestamp": False}})
        inst = registry.create_logger("db")
        inst.info("%s rows in %d ms, 100%%", 3, 12.7)
        inst.info("payload %j", {"id": 1})
        inst.info("missing %s %s", "one")

        assert log_file.read_text(encoding="utf-8") == (
            "info: 3 rows in 12 ms, 100%\n"
            'info: payload {"id":1}\n'
            "info: missing one %s\n"
        )

    def test_unserializable_argument_does_not_raise(self, registry, log_file):
        registry.init({"file": {"path": str(log_file), "timestamp": False}})
        registry.create_logger("db").info("obj", {(1, 2): "a"})

        assert log_file.read_text(encoding="utf-8") == "info: obj {(1, 2): 'a'}\n"

    def test_collected_registry(self):
        registry = PipelineRegistry()
        registry.init({})
        inst = registry.create_logger("db")

        del registry
        gc.collect()

        with pytest.raises(NotInitializedError):
            inst.info("orphaned")

    def test_predicates_after_shutdown(self, registry):
        registry.init({})
        inst = registry.create_logger("db")
        registry.shutdown()

        with pytest.raises(NotInitializedError):
            inst.is_info()
        with pytest.raises(NotInitializedError):
            inst.error("too late")
