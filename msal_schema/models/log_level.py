"""MSAL log levels and the logger callback contract."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from msal_schema.errors import UnknownEnumValue
from msal_schema.marshal import reject


class LogLevel(str, Enum):
    """Severity of an MSAL log line, most to least severe."""

    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"
    VERBOSE = "Verbose"

    @property
    def severity(self) -> int:
        """MSAL's numeric form: Error=0 ... Verbose=3."""
        return _ORDER.index(self)

    @classmethod
    def lookup(cls, value: Any) -> LogLevel | None:
        """Match a member by instance, MSAL number 0..3, or exact wire name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return _ORDER[value] if 0 <= value < len(_ORDER) else None
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        return None

    @classmethod
    def coerce(cls, value: Any) -> LogLevel:
        level = cls.lookup(value)
        if level is None:
            raise reject(
                UnknownEnumValue(
                    entity="LogLevel",
                    field_path="level",
                    value=value,
                    allowed=[member.value for member in cls],
                )
            )
        return level


_ORDER: tuple[LogLevel, ...] = tuple(LogLevel)


def normalize_log_level(value: Any) -> Any:
    """Map accepted aliases onto LogLevel; anything else is left for enum validation."""
    level = LogLevel.lookup(value)
    return value if level is None else level


# (level, message, contains_pii) -> None, invoked synchronously.
LoggerCallback = Callable[[LogLevel, str, bool], None]
