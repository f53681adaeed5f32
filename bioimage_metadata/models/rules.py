"""Structural rules attached to model fields as annotation markers.

Pydantic ignores these markers while decoding; they are only evaluated by
``SpecModel.violations()``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from bioimage_metadata.errors import Violation, ViolationKind

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Rule:
    def check(self, *, entity: str, field_path: str, value: Any) -> Violation | None:
        raise NotImplementedError


@dataclass(frozen=True)
class Required(Rule):
    def check(self, *, entity: str, field_path: str, value: Any) -> Violation | None:
        if value is not None:
            return None
        return Violation(ViolationKind.MISSING_FIELD, entity, field_path, "field is required")


@dataclass(frozen=True)
class MinLength(Rule):
    min_length: int

    def check(self, *, entity: str, field_path: str, value: Any) -> Violation | None:
        if value is None or len(value) >= self.min_length:
            return None
        return Violation(
            ViolationKind.TOO_SHORT,
            entity,
            field_path,
            f"must be at least {self.min_length} characters, got {len(value)}",
        )


@dataclass(frozen=True)
class EmailFormat(Rule):
    def check(self, *, entity: str, field_path: str, value: Any) -> Violation | None:
        if value is None or EMAIL_PATTERN.fullmatch(value):
            return None
        return Violation(ViolationKind.INVALID_FORMAT, entity, field_path, f"{value!r} is not an email address")


@dataclass(frozen=True)
class OneOf(Rule):
    choices: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, values: Iterable[Any]) -> OneOf:
        return cls(frozenset(str(value) for value in values))

    def check(self, *, entity: str, field_path: str, value: Any) -> Violation | None:
        if value is None:
            return None
        items = value if isinstance(value, list) else [value]
        for item in items:
            if str(item) not in self.choices:
                allowed = ", ".join(sorted(self.choices))
                return Violation(
                    ViolationKind.OUT_OF_ENUMERATION,
                    entity,
                    field_path,
                    f"{item!r} is not one of: {allowed}",
                )
        return None


REQUIRED = Required()
EMAIL = EmailFormat()
