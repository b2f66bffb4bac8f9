"""
Settings file loading for the cslogger CLI.

Reads logger settings from JSON or YAML files. The file format is chosen by
extension (``.json``, ``.yaml``, ``.yml``); anything else is tried as YAML,
which also accepts JSON.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from cslogger.core.exceptions.custom_exceptions import ConfigurationError


def load_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a settings mapping from disk.

    Raises:
        ConfigurationError: If the file is missing, unreadable, malformed or
            does not contain a mapping
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(
            f"Settings file not found: {file_path}",
            error_code="CONFIG_FILE_NOT_FOUND",
            details={"path": str(file_path)},
        )

    try:
        text = file_path.read_text(encoding="utf-8")
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot parse settings file {file_path}: {e}",
            error_code="CONFIG_FILE_UNPARSABLE",
            details={"path": str(file_path)},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file {file_path} must contain a mapping",
            error_code="CONFIG_NOT_A_MAPPING",
            details={"path": str(file_path), "type": type(data).__name__},
        )
    return data
