from __future__ import annotations

from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from bioimage_metadata.identifiers.types import IdentifierKind


class CanonicalIdentifier:
    """Immutable identifier that only ever holds its canonical form.

    Subclasses parse in ``__init__`` and expose the canonical text through
    ``str()``. Instances compare and hash by kind and canonical text, so two
    values parsed from different input shapes are equal.
    """

    __slots__ = ()

    kind: ClassVar[IdentifierKind]
    json_schema_examples: ClassVar[tuple[str, ...]] = ()

    def __str__(self) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CanonicalIdentifier):
            return NotImplemented
        return self.kind == other.kind and str(self) == str(other)

    def __hash__(self) -> int:
        return hash((self.kind, str(self)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable.")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo: dict[int, Any]):
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (str(self),)

    @classmethod
    def _coerce(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"{cls.kind.value} must be given as a string, not {type(value).__name__}.")

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.to_string_ser_schema(when_used="json-unless-none"),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls,
        schema: core_schema.CoreSchema,
        handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        json_schema: JsonSchemaValue = {"type": "string", "title": cls.__name__}
        if cls.json_schema_examples:
            json_schema["examples"] = list(cls.json_schema_examples)
        return json_schema
