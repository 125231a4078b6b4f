"""Schema error types and helpers.

Every failure raised while turning a dynamic object into a typed entity is a
``SchemaError`` so callers can catch one type and still get a structured body
describing which entity and field was at fault.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SchemaErrorBody:
    entity: str
    field_path: str
    detail: str
    code: str
    timestamp: str

    def to_dict(self) -> dict[str, str]:
        return {
            "entity": self.entity,
            "field": self.field_path,
            "detail": self.detail,
            "code": self.code,
            "timestamp": self.timestamp,
        }


class SchemaError(ValueError):
    """Base error with a stable code and a timestamped payload."""

    code = "schema_error"

    def __init__(self, *, entity: str, field_path: str, detail: str) -> None:
        super().__init__(f"{entity}.{field_path}: {detail}" if field_path else f"{entity}: {detail}")
        self.entity = entity
        self.field_path = field_path
        self.detail = detail
        self.timestamp = _utc_now_iso()

    def to_payload(self) -> dict[str, Any]:
        return SchemaErrorBody(
            entity=self.entity,
            field_path=self.field_path,
            detail=self.detail,
            code=self.code,
            timestamp=self.timestamp,
        ).to_dict()


class SchemaViolation(SchemaError):
    """A required field is missing, wrong-typed, or breaks a value constraint."""

    code = "schema_violation"

    def __init__(
        self,
        *,
        entity: str,
        field_path: str,
        expected: str,
        detail: str | None = None,
    ) -> None:
        super().__init__(entity=entity, field_path=field_path, detail=detail or expected)
        self.expected = expected

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["expected"] = self.expected
        return payload


class UnknownEnumValue(SchemaError):
    """A value outside a closed enumeration (LogLevel, cacheLocation, ...)."""

    code = "unknown_enum_value"

    def __init__(
        self,
        *,
        entity: str,
        field_path: str,
        value: Any,
        allowed: Sequence[str],
    ) -> None:
        allowed = tuple(allowed)
        super().__init__(
            entity=entity,
            field_path=field_path,
            detail=f"{value!r} is not one of {', '.join(allowed)}",
        )
        self.value = value
        self.allowed = allowed

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["allowed"] = list(self.allowed)
        return payload
