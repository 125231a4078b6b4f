"""Common base for every MSAL schema entity."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, SerializationInfo, ValidationError, model_serializer
from pydantic.alias_generators import to_camel

from msal_schema import marshal
from msal_schema.unset import UNSET


class SchemaModel(BaseModel):
    """Immutable entity with camelCase wire names and an extension map.

    Unknown input keys are kept (``extensions``) and re-emitted by
    ``to_dynamic``. Dynamic input is matched on wire names only; ``build``
    takes Python names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_alias=True,
        validate_by_name=False,
        extra="allow",
        frozen=True,
    )

    @classmethod
    def build(cls, **fields: Any) -> Self:
        """Strict keyword construction: any invalid field raises a SchemaError."""
        try:
            return cls.model_validate(fields, by_name=True)
        except ValidationError as exc:
            raise marshal.translate_validation_error(cls, exc) from None

    @classmethod
    def from_dynamic(cls, data: Any) -> Self:
        return marshal.from_dynamic(cls, data)

    def to_dynamic(self) -> dict[str, Any]:
        return marshal.to_dynamic(self)

    @property
    def extensions(self) -> dict[str, Any]:
        """Input fields this schema does not declare, preserved verbatim."""
        return dict(self.model_extra or {})

    def is_set(self, field_name: str) -> bool:
        return getattr(self, field_name) is not UNSET

    @model_serializer(mode="plain")
    def _serialize(self, info: SerializationInfo) -> dict[str, Any]:
        return marshal.dump_model(self, by_alias=bool(info.by_alias), json_mode=info.mode == "json")
