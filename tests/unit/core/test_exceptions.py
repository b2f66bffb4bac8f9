from cslogger.core.exceptions.custom_exceptions import (
    ConfigurationError,
    CsLoggerError,
    NotInitializedError,
    ShutdownTimeoutError,
)


def test_error_code_defaults_to_class_name():
    error = ConfigurationError("bad", details={"field": "syslog.type"})
    assert error.error_code == "ConfigurationError"
    assert error.details == {"field": "syslog.type"}
    assert isinstance(error, CsLoggerError)


def test_not_initialized_has_fixed_message():
    error = NotInitializedError()
    assert str(error) == "Log system is not initialized"
    assert error.message == "Log system is not initialized"


def test_shutdown_timeout_is_cslogger_error():
    assert issubclass(ShutdownTimeoutError, CsLoggerError)
