"""Structured logging configuration using structlog."""

import logging
import os
import socket
from collections.abc import Callable

import structlog

from msal_schema.config import settings

# Cache hostname and PID at module load time (they don't change)
_HOSTNAME = socket.gethostname()
_PID = os.getpid()

# MSAL log levels mapped onto structlog method names. Verbose has no
# direct counterpart and lands on debug.
_MSAL_LEVEL_METHODS: dict[str, str] = {
    "Error": "error",
    "Warning": "warning",
    "Info": "info",
    "Verbose": "debug",
}


def _format_log_message(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict,
) -> str:
    """
    Format log messages as a single line.

    Produces output like: INFO:     [hostname:pid] event_name key=value
    """
    level = event_dict.pop("level", "info").upper()
    event = event_dict.pop("event", "")
    timestamp = event_dict.pop("timestamp", "")

    context_parts = [f"{k}={v}" for k, v in event_dict.items()]
    context_str = " ".join(context_parts)

    prefix = f"{level}:     [{_HOSTNAME}:{_PID}]"
    if timestamp:
        prefix = f"{timestamp} {prefix}"

    if context_str:
        return f"{prefix} {event} {context_str}"
    return f"{prefix} {event}"


def setup_logging() -> None:
    """
    Configure structlog for applications embedding the schema layer.

    Sets up structured logging with:
    - Context variable merging
    - Log level filtering based on settings.log_level / settings.debug
    - Single-line key=value output
    """
    log_level = logging.getLevelNamesMapping().get(settings.resolved_log_level(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _format_log_message,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,  # Allow reconfiguration
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a logger instance.

    Args:
        name: Optional logger name, typically __name__ of the module.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)


def structlog_callback(name: str = "msal") -> Callable[..., None]:
    """Build an MSAL logger callback that forwards lines to structlog.

    The returned callable has the ``(level, message, contains_pii)`` shape
    expected by ``LoggerOptions.logger_callback``. Suppression of PII lines
    happens before the callback is reached, so the message is logged as is.
    """

    logger = get_logger(name)

    def _callback(level: object, message: str, contains_pii: bool) -> None:
        level_name = getattr(level, "value", level)
        method = _MSAL_LEVEL_METHODS.get(str(level_name), "info")
        getattr(logger, method)("msal", message=message, contains_pii=contains_pii)

    return _callback
