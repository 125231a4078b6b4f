"""Sentinel for optional fields that were never provided.

``UNSET`` keeps "absent" apart from "explicitly empty": an optional string
that was never supplied is ``UNSET``, one supplied as ``""`` is ``""``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, Union, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class UnsetType:
    _instance: UnsetType | None = None

    def __new__(cls) -> UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> UnsetType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> UnsetType:
        return self

    def __reduce__(self) -> tuple[type[UnsetType], tuple[()]]:
        return (UnsetType, ())


UNSET = UnsetType()


def is_unset(value: Any) -> bool:
    return value is UNSET


class _ValidateAsInner:
    """Validate a ``T | UnsetType`` field as plain ``T``.

    ``UNSET`` only ever reaches a model as a field default, and defaults are
    not validated, so the sentinel never needs a schema of its own. Keeping it
    out of the validation schema also keeps pydantic error locations free of
    union member tags.
    """

    def __get_pydantic_core_schema__(
        self, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        members = tuple(arg for arg in get_args(source) if arg is not UnsetType)
        inner = members[0] if len(members) == 1 else Union[members]
        return handler.generate_schema(inner)


if TYPE_CHECKING:
    from typing import TypeAlias, TypeVar

    T = TypeVar("T")
    Maybe: TypeAlias = T | UnsetType
else:

    class Maybe:
        """``Maybe[T]``: a field that is either a valid ``T`` or ``UNSET``."""

        def __class_getitem__(cls, item: Any) -> Any:
            return Annotated[Union[item, UnsetType], _ValidateAsInner()]
