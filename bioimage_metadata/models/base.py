from __future__ import annotations

from collections.abc import Iterator
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    field_validator,
    model_serializer,
)

from bioimage_metadata.errors import EntityValidationError, Violation, ViolationKind
from bioimage_metadata.models.presence import coerce_field, encode_field, presence_kind
from bioimage_metadata.models.rules import Rule


class SpecModel(BaseModel):
    """Base for MIFA and REMBI entities.

    Decoding coerces types (identifiers, URLs, datetimes, enums) and applies
    the presence codec. Structural rules are never checked implicitly: call
    ``violations()``, ``is_valid()`` or ``check()``, or wrap in ``Valid``.
    """

    spec_namespace: ClassVar[str] = ""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @classmethod
    def entity_name(cls) -> str:
        if cls.spec_namespace:
            return f"{cls.spec_namespace}.{cls.__name__}"
        return cls.__name__

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_presence(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name or "")
        if field is None:
            return value
        kind = presence_kind(field.metadata)
        if kind is None:
            return value
        return coerce_field(kind, value)

    @model_serializer(mode="wrap")
    def _encode_presence(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if name not in data:
                continue
            value = getattr(self, name)
            kind = presence_kind(field.metadata)
            if kind is None:
                if value is None:
                    del data[name]
                continue
            emit, wire_value = encode_field(kind, value)
            if not emit:
                del data[name]
            elif value is None:
                data[name] = wire_value
        return data

    def violations(self) -> list[Violation]:
        return list(self._iter_violations(""))

    def is_valid(self) -> bool:
        return not self.violations()

    def check(self) -> None:
        violations = self.violations()
        if violations:
            raise EntityValidationError(
                entity=self.entity_name(),
                violations=tuple(violations),
                value=self,
            )

    def cross_field_violations(self, prefix: str) -> Iterator[Violation]:
        """Constraints spanning several fields; entities override as needed."""
        return iter(())

    def _iter_violations(self, prefix: str) -> Iterator[Violation]:
        entity = self.entity_name()
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            path = f"{prefix}{name}"
            kind = presence_kind(field.metadata)
            if kind is not None and kind.required and value is None:
                yield Violation(ViolationKind.MISSING_FIELD, entity, path, "field is required")
            for rule in field.metadata:
                if not isinstance(rule, Rule):
                    continue
                violation = rule.check(entity=entity, field_path=path, value=value)
                if violation is not None:
                    yield violation
            yield from _nested_violations(value, path)
        yield from self.cross_field_violations(prefix)


def _nested_violations(value: Any, path: str) -> Iterator[Violation]:
    if isinstance(value, SpecModel):
        yield from value._iter_violations(f"{path}.")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            if isinstance(item, SpecModel):
                yield from item._iter_violations(f"{path}[{index}].")
