"""Presence-aware field codec.

Collection and free-text fields distinguish three states: absent (``None``),
present but empty, and present with content. Each tagged field declares a
``FieldKind`` that decides what goes on the wire:

    kind                               absent  empty        content
    required-list / required-text      empty   emit empty   emit
    optional-list / optional-text      omit    omit         emit
    optional-list-significant-empty    omit    emit empty   emit

Decoding reads a missing key as absent and an empty value as empty
(``decode_field``). Entities then store the state they would emit: required
kinds hold an empty value instead of ``None``, and the collapsing optional
kinds store a decoded empty value as absent, since they never emit it.
"""

from __future__ import annotations

from collections.abc import Sized
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class PresenceState(StrEnum):
    ABSENT = "absent"
    EMPTY = "empty"
    CONTENT = "content"


class FieldKind(StrEnum):
    REQUIRED_LIST = "required-list"
    OPTIONAL_LIST = "optional-list"
    OPTIONAL_LIST_SIGNIFICANT_EMPTY = "optional-list-significant-empty"
    REQUIRED_TEXT = "required-text"
    OPTIONAL_TEXT = "optional-text"

    @property
    def required(self) -> bool:
        return self in _REQUIRED_KINDS

    @property
    def collapses_empty(self) -> bool:
        return self in _COLLAPSING_KINDS

    @property
    def empty_value(self) -> Any:
        if self in _TEXT_KINDS:
            return ""
        return []


_REQUIRED_KINDS = frozenset({FieldKind.REQUIRED_LIST, FieldKind.REQUIRED_TEXT})
_COLLAPSING_KINDS = frozenset({FieldKind.OPTIONAL_LIST, FieldKind.OPTIONAL_TEXT})
_TEXT_KINDS = frozenset({FieldKind.REQUIRED_TEXT, FieldKind.OPTIONAL_TEXT})


@dataclass(frozen=True)
class Presence:
    """Annotation marker attaching a ``FieldKind`` to a model field."""

    kind: FieldKind


REQUIRED_LIST = Presence(FieldKind.REQUIRED_LIST)
OPTIONAL_LIST = Presence(FieldKind.OPTIONAL_LIST)
SIGNIFICANT_EMPTY_LIST = Presence(FieldKind.OPTIONAL_LIST_SIGNIFICANT_EMPTY)
REQUIRED_TEXT = Presence(FieldKind.REQUIRED_TEXT)
OPTIONAL_TEXT = Presence(FieldKind.OPTIONAL_TEXT)


def presence_of(value: Any) -> PresenceState:
    if value is None:
        return PresenceState.ABSENT
    if isinstance(value, Sized) and len(value) == 0:
        return PresenceState.EMPTY
    return PresenceState.CONTENT


def emits(kind: FieldKind, state: PresenceState) -> bool:
    if state == PresenceState.CONTENT:
        return True
    if kind.required:
        return True
    if state == PresenceState.EMPTY:
        return kind == FieldKind.OPTIONAL_LIST_SIGNIFICANT_EMPTY
    return False


def encode_field(kind: FieldKind, value: Any) -> tuple[bool, Any]:
    """Return ``(emit, wire_value)`` for a field value."""
    state = presence_of(value)
    if not emits(kind, state):
        return False, None
    if state == PresenceState.ABSENT:
        return True, kind.empty_value
    return True, value


def decode_field(present: bool, value: Any = None) -> PresenceState:
    if not present or value is None:
        return PresenceState.ABSENT
    return presence_of(value)


def coerce_field(kind: FieldKind, value: Any) -> Any:
    """Bring a decoded or constructed value into the state the wire would round-trip to."""
    state = decode_field(value is not None, value)
    if state == PresenceState.ABSENT:
        return kind.empty_value if kind.required else None
    if state == PresenceState.EMPTY and kind.collapses_empty:
        return None
    return value


def presence_kind(metadata: list[Any]) -> FieldKind | None:
    for item in metadata:
        if isinstance(item, Presence):
            return item.kind
    return None
