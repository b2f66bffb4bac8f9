from .custom_exceptions import (
    ConfigurationError,
    CsLoggerError,
    NotInitializedError,
    ShutdownTimeoutError,
)

__all__ = [
    "CsLoggerError",
    "ConfigurationError",
    "NotInitializedError",
    "ShutdownTimeoutError",
]
