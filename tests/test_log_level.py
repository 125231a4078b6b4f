"""Tests for LogLevel and the PII-gated logger callback."""

import pytest
import structlog
from structlog.testing import capture_logs

from msal_schema import UnknownEnumValue
from msal_schema.logger import get_logger, setup_logging, structlog_callback
from msal_schema.models import LoggerOptions, LogLevel
from msal_schema.observability.schema_metrics import get_schema_metrics


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[LogLevel, str, bool]] = []

    def __call__(self, level: LogLevel, message: str, contains_pii: bool) -> None:
        self.calls.append((level, message, contains_pii))


def _options(recorder: _Recorder, *, pii: bool, level: str = "Info") -> LoggerOptions:
    return LoggerOptions.from_dynamic(
        {"loggerCallback": recorder, "piiLoggingEnabled": pii, "logLevel": level}
    )


def test_pii_line_is_suppressed_when_pii_logging_disabled() -> None:
    recorder = _Recorder()
    options = _options(recorder, pii=False)

    delivered = options.dispatch(LogLevel.INFO, "user abeli@microsoft.com signed in", True)

    assert delivered is False
    assert recorder.calls == []


def test_pii_line_is_delivered_once_when_pii_logging_enabled() -> None:
    recorder = _Recorder()
    options = _options(recorder, pii=True)

    delivered = options.dispatch(LogLevel.WARNING, "user abeli@microsoft.com", True)

    assert delivered is True
    assert recorder.calls == [(LogLevel.WARNING, "user abeli@microsoft.com", True)]


def test_non_pii_line_is_delivered_regardless_of_pii_setting() -> None:
    recorder = _Recorder()
    options = _options(recorder, pii=False)

    options.dispatch("Error", "token request failed", False)

    assert recorder.calls == [(LogLevel.ERROR, "token request failed", False)]


def test_dispatch_does_not_filter_by_level() -> None:
    recorder = _Recorder()
    options = _options(recorder, pii=False, level="Error")

    options.dispatch(LogLevel.VERBOSE, "cache lookup", False)

    assert recorder.calls == [(LogLevel.VERBOSE, "cache lookup", False)]


def test_callback_exceptions_propagate() -> None:
    def explode(level: LogLevel, message: str, contains_pii: bool) -> None:
        raise RuntimeError("sink unavailable")

    options = LoggerOptions.from_dynamic({"loggerCallback": explode})

    with pytest.raises(RuntimeError, match="sink unavailable"):
        options.dispatch(LogLevel.INFO, "hello")


def test_dispatch_without_callback_is_a_no_op() -> None:
    assert LoggerOptions().dispatch(LogLevel.INFO, "hello") is False


def test_dispatch_rejects_unknown_level() -> None:
    recorder = _Recorder()
    with pytest.raises(UnknownEnumValue):
        _options(recorder, pii=True).dispatch("Trace", "hello")
    assert recorder.calls == []


def test_dispatch_outcomes_are_counted() -> None:
    recorder = _Recorder()
    options = _options(recorder, pii=False)

    options.dispatch(LogLevel.INFO, "secret", True)
    options.dispatch(LogLevel.INFO, "public", False)

    counts = get_schema_metrics().snapshot()["log_dispatch"]
    assert counts == {("Info", "suppressed"): 1, ("Info", "delivered"): 1}


def test_log_level_numeric_forms() -> None:
    assert LogLevel.coerce(0) is LogLevel.ERROR
    assert LogLevel.coerce(3) is LogLevel.VERBOSE
    assert LogLevel.VERBOSE.severity == 3
    assert LogLevel.lookup(True) is None
    assert LogLevel.lookup(7) is None


@pytest.mark.parametrize("name", ["error", "VERBOSE", " Info"])
def test_log_level_names_are_case_sensitive(name: str) -> None:
    assert LogLevel.lookup(name) is None
    with pytest.raises(UnknownEnumValue):
        LoggerOptions.from_dynamic({"logLevel": name})


def test_structlog_callback_forwards_lines() -> None:
    callback = structlog_callback("msal.test")

    with capture_logs() as logs:
        callback(LogLevel.WARNING, "clock skew detected", False)
        callback(LogLevel.VERBOSE, "cache hit", False)

    assert [(e["log_level"], e["message"]) for e in logs] == [
        ("warning", "clock skew detected"),
        ("debug", "cache hit"),
    ]


def test_structlog_callback_plugs_into_logger_options() -> None:
    options = LoggerOptions.from_dynamic(
        {"loggerCallback": structlog_callback(), "piiLoggingEnabled": False}
    )

    with capture_logs() as logs:
        options.dispatch(LogLevel.INFO, "acquireTokenSilent called", False)
        options.dispatch(LogLevel.INFO, "user abeli@microsoft.com", True)

    messages = [e["message"] for e in logs if e["event"] == "msal"]
    assert messages == ["acquireTokenSilent called"]


def test_setup_logging_configures_filtering_logger() -> None:
    try:
        setup_logging()
        assert structlog.is_configured()
        get_logger(__name__).info("configured", component="tests")
    finally:
        structlog.reset_defaults()
