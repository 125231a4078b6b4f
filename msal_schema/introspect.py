"""Helpers for walking pydantic model fields by their wire names."""

from __future__ import annotations

from typing import Any, get_args

from pydantic import AliasChoices, BaseModel
from pydantic.fields import FieldInfo


def wire_name(name: str, field: FieldInfo) -> str:
    return field.serialization_alias or field.alias or name


def input_keys(name: str, field: FieldInfo) -> set[str]:
    """Keys that populate ``field`` from dynamic input: the wire name and its aliases."""
    keys = {wire_name(name, field)}
    validation_alias = field.validation_alias
    if isinstance(validation_alias, str):
        keys.add(validation_alias)
    elif isinstance(validation_alias, AliasChoices):
        keys.update(choice for choice in validation_alias.choices if isinstance(choice, str))
    return keys


def accepted_keys(name: str, field: FieldInfo) -> set[str]:
    """``input_keys`` plus the Python name, as seen in error locations."""
    return input_keys(name, field) | {name}


def field_for_key(model: type[BaseModel], key: Any) -> str | None:
    if not isinstance(key, str):
        return None
    for name, field in model.model_fields.items():
        if key in accepted_keys(name, field):
            return name
    return None


def nested_model(annotation: Any) -> type[BaseModel] | None:
    """The model class carried by a field annotation, if it carries exactly one."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    for arg in get_args(annotation):
        found = nested_model(arg)
        if found is not None:
            return found
    return None


def lookup(data: Any, name: str, field: FieldInfo) -> Any:
    """Value supplied for ``field`` in a mapping, or ``None``."""
    for key in input_keys(name, field):
        if key in data:
            return data[key]
    return None
