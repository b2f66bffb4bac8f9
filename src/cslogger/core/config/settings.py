"""
Configuration schema for cslogger.

This module provides the pydantic models that validate and normalise the
caller-supplied logger settings, and the pydantic-settings class holding
process defaults taken from the environment.

Classes:
    ConsoleConfig: Console destination options
    RollingFileConfig: Size based rotation options for the file destination
    FileConfig: File destination options
    RemoteConfig: Syslog-like remote destination options
    LoggerSettings: Complete caller configuration
    EnvironmentSettings: Process defaults (``CSLOGGER_*`` variables)

Settings Schema:
    Keys follow the camelCase names callers already use in JSON/YAML files
    (``showName``, ``rollingFile``, ``maxSize`` ...); snake_case names are
    accepted as well. Unknown keys are ignored.

Example:
    >>> settings = LoggerSettings.model_validate({
    ...     "name": "mylog",
    ...     "level": "debug",
    ...     "levels": {"db": "warn"},
    ...     "showName": "full",
    ...     "file": {"path": "/tmp/app.log", "rollingFile": {"maxSize": 4096}},
    ... })
    >>> settings.file.rolling_file.max_files
    10
"""

from typing import Annotated, Any, Dict, Mapping, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from cslogger.core.exceptions.custom_exceptions import ConfigurationError
from cslogger.core.levels import DEFAULT_LEVEL_NAME

DEFAULT_LOGGER_NAME = "logger"
DEFAULT_LOGFILE = "logging.log"
DEFAULT_MAX_SIZE = 10_000_000
DEFAULT_MAX_FILES = 10
DEFAULT_REMOTE_TYPE = "RFC5425"


def invalid_field_error(
    error: PydanticValidationError, subject: str
) -> ConfigurationError:
    """ConfigurationError naming the first invalid field of a pydantic error"""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return ConfigurationError(
        f"Invalid {subject} '{field}': {first['msg']}",
        error_code="CONFIG_INVALID_FIELD",
        details={"field": field, "errors": error.errors()},
    )


# Only an explicit false switches timestamps off
TimestampFlag = Annotated[bool, BeforeValidator(lambda v: v is not False)]


class _DestinationModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Optional per-destination threshold, applied after the transport level
    level: Optional[str] = None


class ConsoleConfig(_DestinationModel):
    """Console destination: UTC timestamps and colored level names by default"""

    timestamp: TimestampFlag = True
    colorize: bool = True


class RollingFileConfig(BaseModel):
    """
    Size based rotation for the file destination.

    Missing or zero ``maxSize``/``maxFiles`` fall back to the defaults
    (10,000,000 bytes, 10 files including the primary).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    max_size: int = Field(default=DEFAULT_MAX_SIZE, alias="maxSize")
    max_files: int = Field(default=DEFAULT_MAX_FILES, alias="maxFiles")
    tailable: bool = True

    @field_validator("max_size", mode="before")
    @classmethod
    def default_max_size(cls, v: Any) -> Any:
        return v or DEFAULT_MAX_SIZE

    @field_validator("max_files", mode="before")
    @classmethod
    def default_max_files(cls, v: Any) -> Any:
        return v or DEFAULT_MAX_FILES

    @field_validator("tailable", mode="before")
    @classmethod
    def default_tailable(cls, v: Any) -> Any:
        return True if v is None else v


class FileConfig(_DestinationModel):
    """File destination, optionally rotated by size"""

    path: str = DEFAULT_LOGFILE
    timestamp: TimestampFlag = True
    colorize: bool = False
    rolling_file: Optional[RollingFileConfig] = Field(
        default=None, alias="rollingFile"
    )

    @field_validator("path", mode="before")
    @classmethod
    def default_path(cls, v: Any) -> Any:
        return v or DEFAULT_LOGFILE


class RemoteConfig(_DestinationModel):
    """
    Syslog-like remote destination.

    Protocol, framing type and facility names are checked when the sink is
    built, so the error can name the offending field.
    """

    host: Optional[str] = None
    port: Optional[int] = None
    protocol: str = "udp4"
    path: Optional[str] = None
    facility: str = "local0"
    type: str = DEFAULT_REMOTE_TYPE

    @field_validator("port", mode="before")
    @classmethod
    def ignore_non_numeric_port(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return None
        if isinstance(v, str):
            return int(v) if v.strip().isdigit() else None
        return v if isinstance(v, int) else None

    @field_validator("protocol", "facility", "type", mode="before")
    @classmethod
    def fill_blank(cls, v: Any, info: ValidationInfo) -> Any:
        if v:
            return v
        return cls.model_fields[info.field_name].default


class LoggerSettings(BaseModel):
    """
    Caller-supplied logger configuration.

    Attributes:
        name: Application name used in full name prefixes and remote headers
        level: Global level name (case-insensitive, unknown means trace)
        levels: Per-module level overrides
        show_name: true/false or "full"/"simple"/"none"
        show_pid: Prefix lines with ``#<pid>``
        console / file / syslog: Destinations; omitted ones are not built
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = DEFAULT_LOGGER_NAME
    level: str = DEFAULT_LEVEL_NAME
    levels: Dict[str, str] = Field(default_factory=dict)
    show_name: Union[bool, str, None] = Field(default=None, alias="showName")
    show_pid: bool = Field(default=False, alias="showPid")
    console: Optional[ConsoleConfig] = None
    file: Optional[FileConfig] = None
    syslog: Optional[RemoteConfig] = Field(
        default=None,
        validation_alias=AliasChoices("syslog", "remote"),
    )

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> Any:
        return v or DEFAULT_LOGGER_NAME

    @field_validator("level", mode="before")
    @classmethod
    def default_level(cls, v: Any) -> Any:
        # Non-string levels are kept as text and resolve to trace later
        if not v:
            return DEFAULT_LEVEL_NAME
        return v if isinstance(v, str) else str(v)

    @field_validator("levels", mode="before")
    @classmethod
    def stringify_levels(cls, v: Any) -> Any:
        if not v:
            return {}
        if isinstance(v, Mapping):
            return {str(k): str(level) for k, level in v.items()}
        return v

    @field_validator("show_name", mode="before")
    @classmethod
    def keep_text_or_truthiness(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return bool(v)

    @field_validator("show_pid", mode="before")
    @classmethod
    def truthy_pid(cls, v: Any) -> bool:
        return bool(v)

    @classmethod
    def parse(
        cls, settings: Union["LoggerSettings", Mapping[str, Any]]
    ) -> "LoggerSettings":
        """
        Validate raw settings, reporting problems as ConfigurationError.

        Raises:
            ConfigurationError: With ``details["field"]`` set to the dotted
                path of the first invalid key
        """
        if isinstance(settings, LoggerSettings):
            return settings
        if not isinstance(settings, Mapping):
            raise ConfigurationError(
                "Logger settings must be a mapping",
                error_code="CONFIG_NOT_A_MAPPING",
                details={"field": "", "type": type(settings).__name__},
            )
        try:
            return cls.model_validate(dict(settings))
        except PydanticValidationError as e:
            raise invalid_field_error(e, "logger setting") from e


class EnvironmentSettings(BaseSettings):
    """
    Process defaults with environment variable support.

    Used when ``init()`` is called without settings. Every attribute can be
    overridden with a ``CSLOGGER_`` prefixed variable, for example
    ``CSLOGGER_LEVEL=debug`` or ``CSLOGGER_SHOW_PID=true``.

    Attributes:
        NAME: Application name
        LEVEL: Global level name
        SHOW_NAME: Name display mode
        SHOW_PID: Prefix lines with the process id
        CONSOLE_TIMESTAMP: Timestamp console lines
        CONSOLE_COLORIZE: Color console level names
        LOG_FORMAT: Renderer for cslogger's own diagnostics (json/text)
        DEBUG: Verbose rich diagnostics in the CLI
    """

    NAME: str = DEFAULT_LOGGER_NAME
    LEVEL: str = DEFAULT_LEVEL_NAME
    SHOW_NAME: str = "true"
    SHOW_PID: bool = False
    CONSOLE_TIMESTAMP: bool = True
    CONSOLE_COLORIZE: bool = True

    LOG_FORMAT: str = "text"
    DEBUG: bool = False

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = ["json", "text"]
        if v.lower() not in valid_formats:
            raise ValueError(f"LOG_FORMAT must be one of: {valid_formats}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_prefix="CSLOGGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def default_logger_settings(self) -> LoggerSettings:
        """Settings equivalent to calling ``init()`` with nothing"""
        return LoggerSettings(
            name=self.NAME,
            level=self.LEVEL,
            show_name=self.SHOW_NAME,
            show_pid=self.SHOW_PID,
            console=ConsoleConfig(
                timestamp=self.CONSOLE_TIMESTAMP,
                colorize=self.CONSOLE_COLORIZE,
            ),
        )


def get_environment_settings() -> EnvironmentSettings:
    """
    Read process defaults from the environment.

    Raises:
        ConfigurationError: If a ``CSLOGGER_*`` variable is invalid
    """
    try:
        return EnvironmentSettings()
    except PydanticValidationError as e:
        raise invalid_field_error(e, "environment setting") from e
