"""Primitive value contracts shared by the entity models."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field, StrictInt, StrictStr, StringConstraints
from pydantic_core import PydanticCustomError

NonEmptyStr = Annotated[str, StringConstraints(strict=True, min_length=1)]

# A scope list must name at least one scope.
ScopeList = Annotated[tuple[StrictStr, ...], Field(min_length=1)]


def _read_only(value: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(value)


# Containers are read-only so a parsed entity cannot change in place.
StringList = tuple[StrictStr, ...]
StringMap = Annotated[dict[StrictStr, StrictStr], AfterValidator(_read_only)]

# Timeouts are milliseconds handed to the external client.
Timeout = Annotated[StrictInt, Field(ge=0)]

# `Date.toString()` output, e.g. "Thu Aug 06 2020 10:35:12 GMT+1000 (AEST)".
_JS_DATE_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z"
_JS_ZONE_NAME = re.compile(r"\s*\([^)]*\)\s*$")


def _integral_seconds(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# JSON numbers may arrive as 1.5e9; integral floats are accepted as ints.
WholeNumber = Annotated[StrictInt, BeforeValidator(_integral_seconds)]

# Claim timestamps: integer seconds since the epoch.
NumericDate = WholeNumber


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Any) -> datetime:
    """Coerce the timestamp forms an MSAL response may carry into an aware datetime.

    Accepts datetimes, Unix seconds, ISO-8601 strings and JavaScript
    ``Date.toString()`` output. Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        return _aware(value)
    if isinstance(value, bool):
        raise PydanticCustomError("datetime_type", "Expected a timestamp, got bool")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise PydanticCustomError(
                "datetime_parsing", "Timestamp {value} is out of range", {"value": value}
            ) from None
    if isinstance(value, str):
        text = _JS_ZONE_NAME.sub("", value).strip()
        try:
            return datetime.strptime(text, _JS_DATE_FORMAT)
        except ValueError:
            pass
        try:
            return _aware(datetime.fromisoformat(text))
        except ValueError:
            raise PydanticCustomError(
                "datetime_parsing", "Unrecognised timestamp {value}", {"value": value}
            ) from None
    raise PydanticCustomError(
        "datetime_type", "Expected a timestamp, got {kind}", {"kind": type(value).__name__}
    )


Timestamp = Annotated[datetime, BeforeValidator(parse_timestamp)]
