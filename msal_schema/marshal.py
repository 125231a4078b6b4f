"""Bidirectional conversion between dynamic objects and typed entities.

``from_dynamic`` is tolerant of optional fields: a present but wrong-typed
optional value is reset to its default (or ``UNSET``) and logged, unless
``settings.strict_optional_fields`` is on. Required fields, value constraints
and closed enumerations are never tolerated.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, TypeAlias, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import ErrorDetails

from msal_schema.config import settings
from msal_schema.errors import SchemaError, SchemaViolation, UnknownEnumValue
from msal_schema.introspect import field_for_key, input_keys, nested_model, wire_name
from msal_schema.logger import get_logger
from msal_schema.observability.schema_metrics import get_schema_metrics
from msal_schema.reconciler import ReconcileReport, get_reconciler
from msal_schema.unset import UNSET

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

Loc: TypeAlias = tuple[int | str, ...]

_ENUM_ERRORS = frozenset({"enum"})

# Error types meaning "this value has the wrong shape". Only these may be
# tolerated on optional fields; constraint errors (too_short, greater_than_equal)
# and literal mismatches always fail.
_STRUCTURAL_ERRORS = frozenset(
    {
        "bool_parsing",
        "bool_type",
        "callable_type",
        "datetime_parsing",
        "datetime_type",
        "dict_type",
        "float_type",
        "int_from_float",
        "int_parsing",
        "int_type",
        "is_instance_of",
        "iterable_type",
        "list_type",
        "mapping_type",
        "model_attributes_type",
        "model_type",
        "string_sub_type",
        "string_type",
        "tuple_type",
    }
)

_MAX_PASSES = 64
_QUOTED = re.compile(r"'([^']*)'")


def _dotted(loc: Loc) -> str:
    return ".".join(str(part) for part in loc)


def _locate(model: type[BaseModel], loc: Loc) -> tuple[str, Loc | None]:
    """Dotted path of an error plus the location to drop when it may be tolerated.

    Walks nested models as long as the location keeps naming their fields. The
    error belongs to the last field reached; it is tolerable only when that
    field is optional.
    """
    path = _dotted(loc)
    current = model
    for index, key in enumerate(loc):
        name = field_for_key(current, key)
        if name is None:
            return path, None
        field = current.model_fields[name]
        rest = loc[index + 1 :]
        child = nested_model(field.annotation)
        if child is not None and rest and field_for_key(child, rest[0]) is not None:
            current = child
            continue
        return path, (None if field.is_required() else loc[: index + 1])
    return path, None


def _drop_path(model: type[BaseModel], data: Any, loc: Loc) -> Any:
    if not isinstance(data, Mapping):
        return data
    name = field_for_key(model, loc[0])
    if name is None:
        return data
    field = model.model_fields[name]
    keys = input_keys(name, field)
    if len(loc) == 1:
        return {k: v for k, v in data.items() if k not in keys}
    child = nested_model(field.annotation)
    if child is None:
        return data
    return {k: (_drop_path(child, v, loc[1:]) if k in keys else v) for k, v in data.items()}


def _schema_error(entity: str, path: str, error: ErrorDetails) -> SchemaError:
    if error["type"] in _ENUM_ERRORS:
        expected = str(error.get("ctx", {}).get("expected", ""))
        return UnknownEnumValue(
            entity=entity,
            field_path=path,
            value=error.get("input"),
            allowed=_QUOTED.findall(expected),
        )
    return SchemaViolation(entity=entity, field_path=path, expected=error["msg"])


def reject(error: SchemaError) -> SchemaError:
    """Count and log a construction failure, then hand the error back for raising."""
    get_schema_metrics().inc_violation(entity=error.entity, code=error.code)
    logger.info("schema_violation", entity=error.entity, field=error.field_path, code=error.code)
    return error


def translate_validation_error(model: type[BaseModel], exc: ValidationError) -> SchemaError:
    """First error of a pydantic ValidationError as a SchemaError."""
    error = exc.errors(include_url=False)[0]
    path, _ = _locate(model, error["loc"])
    return reject(_schema_error(model.__name__, path, error))


def _drop_invalid_optionals(
    model: type[BaseModel],
    data: dict[str, Any],
    exc: ValidationError,
    defaulted: list[str],
) -> dict[str, Any]:
    entity = model.__name__
    tolerated: list[Loc] = []
    for error in exc.errors(include_url=False):
        path, optional_loc = _locate(model, error["loc"])
        if (
            optional_loc is None
            or error["type"] not in _STRUCTURAL_ERRORS
            or settings.strict_optional_fields
        ):
            raise reject(_schema_error(entity, path, error))
        if optional_loc in tolerated:
            continue
        tolerated.append(optional_loc)
        if error.get("input") is not None:
            # Never log the value itself; optional fields may carry PII.
            logger.warning(
                "schema_optional_field_defaulted",
                entity=entity,
                field=_dotted(optional_loc),
                reason=error["type"],
            )
            defaulted.append(_dotted(optional_loc))

    result: Any = data
    for loc in tolerated:
        result = _drop_path(model, result, loc)
    if result == data:
        raise reject(_schema_error(entity, _dotted(tolerated[0]), exc.errors(include_url=False)[0]))
    return result


def _record_parse(entity: str, report: ReconcileReport, defaulted: list[str]) -> None:
    metrics = get_schema_metrics()
    metrics.inc_parsed(entity=entity, generation=report.generation.label)
    metrics.inc_defaulted(entity=entity, count=len(defaulted))
    for child in report.walk():
        metrics.inc_extension_fields(entity=child.entity, count=len(child.extension_keys))
    if settings.debug:
        logger.debug(
            "schema_entity_parsed",
            entity=entity,
            generation=report.generation.label,
            extensions=list(report.extension_keys),
            deprecated=list(report.deprecated_keys),
            defaulted=defaulted,
        )


def from_dynamic(model: type[M], data: Any) -> M:
    """Build a ``model`` instance from a dynamic (JSON-like) object."""
    if isinstance(data, model):
        return data
    entity = model.__name__
    if not isinstance(data, Mapping):
        raise reject(
            SchemaViolation(
                entity=entity,
                field_path="",
                expected="object",
                detail=f"expected an object, got {type(data).__name__}",
            )
        )

    report = get_reconciler().reconcile(model, data)
    working: dict[str, Any] = dict(data)
    defaulted: list[str] = []
    for _ in range(_MAX_PASSES):
        try:
            instance = model.model_validate(working)
        except ValidationError as exc:
            working = _drop_invalid_optionals(model, working, exc, defaulted)
            continue
        _record_parse(entity, report, defaulted)
        return instance

    raise reject(
        SchemaViolation(
            entity=entity,
            field_path="",
            expected="object",
            detail="too many invalid optional fields",
        )
    )


def _dump_value(value: Any, *, by_alias: bool, json_mode: bool) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=by_alias, mode="json" if json_mode else "python")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat() if json_mode else value
    if isinstance(value, Mapping):
        return {k: _dump_value(v, by_alias=by_alias, json_mode=json_mode) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_dump_value(v, by_alias=by_alias, json_mode=json_mode) for v in value]
    return value


def dump_model(instance: BaseModel, *, by_alias: bool = True, json_mode: bool = False) -> dict[str, Any]:
    """Dynamic form of ``instance``: unset fields omitted, extensions re-emitted."""
    out: dict[str, Any] = {}
    for name, field in type(instance).model_fields.items():
        if field.exclude:
            continue
        value = getattr(instance, name)
        if value is UNSET:
            continue
        if json_mode and callable(value):
            continue
        key = wire_name(name, field) if by_alias else name
        out[key] = _dump_value(value, by_alias=by_alias, json_mode=json_mode)
    for key, value in (instance.model_extra or {}).items():
        out[key] = _dump_value(value, by_alias=by_alias, json_mode=json_mode)
    return out


def to_dynamic(instance: BaseModel) -> dict[str, Any]:
    return dump_model(instance, by_alias=True)
