"""Validation gate.

``Valid[T]`` only ever holds an entity whose validity predicate held at the
moment it was wrapped. There is no public constructor: values come from
``try_new`` or from decoding through ``from_json`` / ``from_dict``. The
wrapped entity is a private copy, so later changes to the caller's object
cannot leak in, and ``inner`` / ``into_inner`` hand out copies for the same
reason. To change a wrapped value, unwrap it, edit it and call ``try_new``
again.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import core_schema

from bioimage_metadata.errors import DeserializationError, EntityValidationError, Violation
from bioimage_metadata.logging_utils import structured_log
from bioimage_metadata.models import SpecModel
from bioimage_metadata.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SpecModel)


class Valid(Generic[T]):
    __slots__ = ("_value",)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError("Valid values are created with Valid.try_new(), Valid.from_json() or Valid.from_dict().")

    @classmethod
    def try_new(cls, value: T) -> Valid[T]:
        """Wrap ``value`` if it satisfies its validity predicate.

        Raises ``EntityValidationError``; its ``value`` attribute is the
        caller's object, unchanged.
        """
        snapshot = value.model_copy(deep=True)
        violations = snapshot.violations()
        if violations:
            _log_rejection(value.entity_name(), violations)
            raise EntityValidationError(
                entity=value.entity_name(),
                violations=tuple(violations),
                value=value,
            )
        return cls._wrap(snapshot)

    @classmethod
    def from_json(cls, entity_type: type[T], data: str | bytes) -> Valid[T]:
        try:
            value = entity_type.model_validate_json(data)
        except PydanticValidationError as exc:
            raise _decode_failure(entity_type, exc) from exc
        return cls._gate_decoded(value)

    @classmethod
    def from_dict(cls, entity_type: type[T], data: Mapping[str, Any]) -> Valid[T]:
        try:
            value = entity_type.model_validate(data)
        except PydanticValidationError as exc:
            raise _decode_failure(entity_type, exc) from exc
        return cls._gate_decoded(value)

    @classmethod
    def _gate_decoded(cls, value: T) -> Valid[T]:
        try:
            return cls.try_new(value)
        except EntityValidationError as exc:
            raise DeserializationError.from_validation_error(exc) from exc

    @classmethod
    def _wrap(cls, value: T) -> Valid[T]:
        instance = object.__new__(cls)
        object.__setattr__(instance, "_value", value)
        return instance

    @property
    def inner(self) -> T:
        """Read-only view: a copy, so edits never reach the wrapped value."""
        return self._value.model_copy(deep=True)

    @property
    def entity_type(self) -> type[T]:
        return type(self._value)

    def into_inner(self) -> T:
        return self._value.model_copy(deep=True)

    def to_json(self, **kwargs: Any) -> str:
        return self._value.model_dump_json(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return self._value.model_dump(mode="json")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Valid is immutable; unwrap with into_inner() and re-validate.")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Valid is immutable.")

    def __copy__(self) -> Valid[T]:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Valid[T]:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        # Unpickling goes back through the gate.
        return _restore, (type(self), self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Valid):
            return NotImplemented
        return type(self._value) is type(other._value) and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Valid({self._value!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        args = get_args(source_type)
        if not args:
            raise TypeError("Valid must be parametrized with an entity type, e.g. Valid[RembiStudy].")
        inner_schema = handler.generate_schema(args[0])
        return core_schema.no_info_before_validator_function(
            _unwrap,
            core_schema.no_info_after_validator_function(cls.try_new, inner_schema),
            serialization=core_schema.wrap_serializer_function_ser_schema(_serialize_wrapped, schema=inner_schema),
        )


def _restore(cls: type[Valid[T]], value: T) -> Valid[T]:
    return cls.try_new(value)


def _unwrap(value: Any) -> Any:
    if isinstance(value, Valid):
        return value._value
    return value


def _serialize_wrapped(value: Any, handler: core_schema.SerializerFunctionWrapHandler) -> Any:
    return handler(_unwrap(value))


def _decode_failure(entity_type: type[SpecModel], exc: PydanticValidationError) -> DeserializationError:
    errors = exc.errors(include_url=False)
    if settings.log_rejections:
        structured_log(
            logger,
            "debug",
            "valid.decode_failed",
            entity_type=entity_type.entity_name(),
            error_count=len(errors),
        )
    return DeserializationError.from_decode_errors(entity=entity_type.entity_name(), errors=errors)


def _log_rejection(entity: str, violations: list[Violation]) -> None:
    if not settings.log_rejections:
        return
    structured_log(
        logger,
        "debug",
        "valid.rejected",
        entity_type=entity,
        violation_count=len(violations),
        violated_fields=[violation.field for violation in violations],
    )
