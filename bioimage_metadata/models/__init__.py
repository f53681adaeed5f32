from bioimage_metadata.models.base import SpecModel
from bioimage_metadata.models.presence import (
    OPTIONAL_LIST,
    OPTIONAL_TEXT,
    REQUIRED_LIST,
    REQUIRED_TEXT,
    SIGNIFICANT_EMPTY_LIST,
    FieldKind,
    Presence,
    PresenceState,
    coerce_field,
    decode_field,
    emits,
    encode_field,
    presence_of,
)
from bioimage_metadata.models.rules import EMAIL, REQUIRED, EmailFormat, MinLength, OneOf, Required, Rule
from bioimage_metadata.models.types import YearText

__all__ = [
    "EMAIL",
    "OPTIONAL_LIST",
    "OPTIONAL_TEXT",
    "REQUIRED",
    "REQUIRED_LIST",
    "REQUIRED_TEXT",
    "SIGNIFICANT_EMPTY_LIST",
    "EmailFormat",
    "FieldKind",
    "MinLength",
    "OneOf",
    "Presence",
    "PresenceState",
    "Required",
    "Rule",
    "SpecModel",
    "YearText",
    "coerce_field",
    "decode_field",
    "emits",
    "encode_field",
    "presence_of",
]
