from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ViolationKind(StrEnum):
    MISSING_FIELD = "missing_field"
    CONFLICTING_FIELDS = "conflicting_fields"
    OUT_OF_ENUMERATION = "out_of_enumeration"
    INVALID_FORMAT = "invalid_format"
    TOO_SHORT = "too_short"


@dataclass(frozen=True)
class Violation:
    kind: ViolationKind
    entity: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message} [{self.entity}, {self.kind.value}]"


def _summarize(violations: tuple[Violation, ...]) -> str:
    return "; ".join(str(violation) for violation in violations)


class EntityValidationError(ValueError):
    """An entity failed its structural validity predicate.

    ``value`` is the caller's object, untouched.
    """

    def __init__(self, *, entity: str, violations: tuple[Violation, ...], value: Any) -> None:
        super().__init__(f"{entity} failed validation: {_summarize(violations)}")
        self.entity = entity
        self.violations = violations
        self.value = value


class DeserializationError(ValueError):
    """Decoding into a validated wrapper failed, either while decoding or while validating."""

    def __init__(
        self,
        message: str,
        *,
        entity: str,
        violations: tuple[Violation, ...] = (),
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.entity = entity
        self.violations = violations
        self.errors = errors or []

    @classmethod
    def from_decode_errors(cls, *, entity: str, errors: list[dict[str, Any]]) -> DeserializationError:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ())) or '<root>'}: {error.get('msg', 'invalid')}"
            for error in errors
        )
        return cls(f"Could not decode {entity}: {details}", entity=entity, errors=errors)

    @classmethod
    def from_validation_error(cls, exc: EntityValidationError) -> DeserializationError:
        return cls(
            f"Decoded {exc.entity} is not valid: {_summarize(exc.violations)}",
            entity=exc.entity,
            violations=exc.violations,
        )
