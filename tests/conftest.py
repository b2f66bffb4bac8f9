"""
Pytest configuration and fixtures for cslogger tests
"""

from pathlib import Path
from typing import Any, Dict

import pytest

import cslogger
from cslogger.pipeline.registry import PipelineRegistry


@pytest.fixture(autouse=True)
def reset_shared_registry():
    """Each test starts and ends without a shared pipeline"""
    cslogger.deinit()
    yield
    cslogger.deinit()


@pytest.fixture
def registry():
    """A private registry, torn down after the test"""
    instance = PipelineRegistry(hostname="testhost")
    yield instance
    instance.deinit()


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    """Path of the log file used by file destination tests"""
    return tmp_path / "cs_logger_test.log"


@pytest.fixture
def file_settings(log_file: Path) -> Dict[str, Any]:
    """Settings writing untimestamped lines to the test log file"""
    return {
        "name": "mylog",
        "level": "trace",
        "showName": "full",
        "file": {"path": str(log_file), "timestamp": False},
    }
