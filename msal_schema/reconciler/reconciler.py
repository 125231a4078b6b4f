"""Reconcile the v1/v2/v3 schema generations into one canonical contract."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel

from msal_schema.introspect import field_for_key, input_keys, lookup, nested_model, wire_name
from msal_schema.reconciler.generations import (
    GENERATION_SHAPES,
    GenerationShape,
    SchemaGeneration,
)

ShapeTable: TypeAlias = Mapping[str, Mapping[SchemaGeneration, GenerationShape]]


class SchemaTableError(ValueError):
    """The generation table (or a model) contradicts the versioning policy."""


class FieldStatus(str, Enum):
    REQUIRED = "required"
    OPTIONAL_DEFAULT = "optional-default"
    OPTIONAL = "optional"
    EXTENSION = "extension"


@dataclass(frozen=True, slots=True)
class FieldRule:
    name: str
    status: FieldStatus
    introduced: SchemaGeneration
    deprecated: bool = False


@dataclass(frozen=True, slots=True)
class ReconcileReport:
    entity: str
    generation: SchemaGeneration
    extension_keys: tuple[str, ...] = ()
    deprecated_keys: tuple[str, ...] = ()
    nested: tuple[ReconcileReport, ...] = ()

    def walk(self) -> Iterator[ReconcileReport]:
        yield self
        for child in self.nested:
            yield from child.walk()


class SchemaReconciler:
    """Holds the generation table and answers field classification questions.

    A field is required when the latest generation defining its entity
    requires it, or when an older generation required it and a later one
    dropped it. Everything else is optional; fields missing from the latest
    generation are still accepted and reported as deprecated.
    """

    def __init__(self, shapes: ShapeTable = GENERATION_SHAPES) -> None:
        self._shapes = shapes
        self._required = {entity: self._canonical_required(gens) for entity, gens in shapes.items()}
        self.validate()

    @staticmethod
    def _canonical_required(gens: Mapping[SchemaGeneration, GenerationShape]) -> frozenset[str]:
        ordered = sorted(gens)
        latest = gens[ordered[-1]]
        required = set(latest.required)
        for generation in ordered[:-1]:
            required.update(f for f in gens[generation].required if f not in latest.fields)
        return frozenset(required)

    def validate(self) -> None:
        """Older shapes must stay valid: latest-required fields exist in every generation."""
        for entity, gens in self._shapes.items():
            if not gens:
                raise SchemaTableError(f"{entity} defines no generation")
            latest = gens[max(gens)]
            for generation, shape in gens.items():
                overlap = shape.required & shape.optional
                if overlap:
                    raise SchemaTableError(
                        f"{entity} {generation.label}: {sorted(overlap)} both required and optional"
                    )
                absent = latest.required - shape.fields
                if absent:
                    raise SchemaTableError(
                        f"{entity}: required {sorted(absent)} missing from {generation.label}"
                    )

    def entities(self) -> tuple[str, ...]:
        return tuple(self._shapes)

    def entity_for(self, model: type[BaseModel]) -> str:
        for klass in model.__mro__:
            if klass.__name__ in self._shapes:
                return klass.__name__
        raise SchemaTableError(f"{model.__name__} has no generation table entry")

    def generations(self, entity: str) -> tuple[SchemaGeneration, ...]:
        return tuple(sorted(self._shapes[entity]))

    def latest_generation(self, entity: str) -> SchemaGeneration:
        return max(self._shapes[entity])

    def known_fields(self, entity: str) -> frozenset[str]:
        fields: frozenset[str] = frozenset()
        for shape in self._shapes[entity].values():
            fields |= shape.fields
        return fields

    def required_fields(self, entity: str) -> frozenset[str]:
        return self._required[entity]

    def deprecated_fields(self, entity: str) -> frozenset[str]:
        latest = self._shapes[entity][self.latest_generation(entity)]
        return self.known_fields(entity) - latest.fields

    def rule(self, entity: str, name: str, *, has_default: bool = False) -> FieldRule:
        gens = self._shapes[entity]
        introduced = next((g for g in sorted(gens) if name in gens[g].fields), None)
        if introduced is None:
            return FieldRule(name, FieldStatus.EXTENSION, self.latest_generation(entity))
        if name in self._required[entity]:
            status = FieldStatus.REQUIRED
        elif has_default:
            status = FieldStatus.OPTIONAL_DEFAULT
        else:
            status = FieldStatus.OPTIONAL
        return FieldRule(name, status, introduced, name in self.deprecated_fields(entity))

    def rules_for(self, model: type[BaseModel]) -> dict[str, FieldRule]:
        """Canonical rule of every declared field of ``model``, keyed by wire name."""
        entity = self.entity_for(model)
        rules: dict[str, FieldRule] = {}
        for name, field in model.model_fields.items():
            if field.exclude:
                continue
            key = wire_name(name, field)
            rules[key] = self.rule(entity, key, has_default=not field.is_required())
        return rules

    def detect_generation(self, entity: str, keys: set[str] | frozenset[str]) -> SchemaGeneration:
        """Oldest generation whose field set covers every known key supplied."""
        gens = self._shapes[entity]
        known = set(keys) & self.known_fields(entity)
        for generation in sorted(gens):
            if known <= gens[generation].fields:
                return generation
        return self.latest_generation(entity)

    def reconcile(self, model: type[BaseModel], data: Mapping[str, Any]) -> ReconcileReport:
        entity = self.entity_for(model)
        keys = {k for k in data if isinstance(k, str)}
        declared: set[str] = set()
        nested: list[ReconcileReport] = []
        for name, field in model.model_fields.items():
            declared.update(input_keys(name, field))
            child = nested_model(field.annotation)
            value = lookup(data, name, field)
            if child is not None and isinstance(value, Mapping):
                nested.append(self.reconcile(child, value))
        wire_keys: set[str] = set()
        for key in keys & declared:
            name = field_for_key(model, key)
            wire_keys.add(wire_name(name, model.model_fields[name]))
        extensions = tuple(sorted(keys - declared))
        deprecated = tuple(sorted(wire_keys & self.deprecated_fields(entity)))
        return ReconcileReport(
            entity=entity,
            generation=self.detect_generation(entity, wire_keys),
            extension_keys=extensions,
            deprecated_keys=deprecated,
            nested=tuple(nested),
        )

    def check_model(self, model: type[BaseModel]) -> None:
        """Raise SchemaTableError when ``model`` disagrees with the canonical rules."""
        entity = self.entity_for(model)
        fields = {
            wire_name(name, field): field
            for name, field in model.model_fields.items()
            if not field.exclude
        }
        known = self.known_fields(entity)
        if set(fields) != known:
            raise SchemaTableError(
                f"{model.__name__} fields differ from table: "
                f"missing={sorted(known - set(fields))} extra={sorted(set(fields) - known)}"
            )
        model_required = {key for key, field in fields.items() if field.is_required()}
        if model_required != self._required[entity]:
            raise SchemaTableError(
                f"{model.__name__} required fields {sorted(model_required)} "
                f"!= canonical {sorted(self._required[entity])}"
            )


_reconciler_singleton: SchemaReconciler | None = None


def get_reconciler() -> SchemaReconciler:
    global _reconciler_singleton
    if _reconciler_singleton is None:
        _reconciler_singleton = SchemaReconciler()
    return _reconciler_singleton
