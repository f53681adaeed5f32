"""ORCID researcher identifiers.

Accepted input shapes, tried in order:

    https://orcid.org/0000-0002-1825-0097
    http://orcid.org/0000-0002-1825-0097
    0000-0002-1825-0097 or 0000000218250097

The canonical output is always the https URL with hyphenated groups.
"""

from __future__ import annotations

from bioimage_metadata.identifiers.base import CanonicalIdentifier
from bioimage_metadata.identifiers.constants import (
    ORCID_BARE_RE,
    ORCID_BASE_URL,
    ORCID_CHECK_RE,
    ORCID_DIGIT_COUNT,
    ORCID_HTTP_RE,
    ORCID_HTTPS_RE,
)
from bioimage_metadata.identifiers.errors import InvalidCheckPattern, UnrecognizedIdentifierShape
from bioimage_metadata.identifiers.types import IdentifierKind, OrcidFormat

_SEGMENT_STRATEGIES = (ORCID_HTTPS_RE, ORCID_HTTP_RE)


def orcid_check_character(digits: str) -> str:
    """ISO 7064 mod 11-2 check character for the 15 base digits."""
    total = 0
    for char in digits:
        total = (total + int(char)) * 2
    result = (12 - total % 11) % 11
    return "X" if result == 10 else str(result)


def _extract_segment(text: str) -> str | None:
    for pattern in _SEGMENT_STRATEGIES:
        match = pattern.fullmatch(text)
        if match:
            return match.group(1)
    if ORCID_BARE_RE.fullmatch(text):
        return text
    return None


def _split_orcid(value: str) -> tuple[str, str]:
    segment = _extract_segment(value.strip())
    if segment is None:
        raise UnrecognizedIdentifierShape(f"Unrecognized ORCID shape: {value!r}.", value=value)

    compact = segment.replace("-", "").upper()
    if not ORCID_CHECK_RE.fullmatch(compact):
        raise InvalidCheckPattern(
            f"ORCID must be 15 digits and a check character, got {segment!r}.",
            value=value,
        )

    digits, check = compact[:ORCID_DIGIT_COUNT], compact[ORCID_DIGIT_COUNT]
    expected = orcid_check_character(digits)
    if check != expected:
        raise InvalidCheckPattern(
            f"Invalid ORCID checksum: expected {expected}, got {check}.",
            value=value,
        )
    return digits, check


class OrcId(CanonicalIdentifier):
    __slots__ = ("_digits", "_check")

    kind = IdentifierKind.ORCID
    json_schema_examples = ("https://orcid.org/0000-0002-1825-0097",)

    def __init__(self, value: str) -> None:
        digits, check = _split_orcid(value)
        object.__setattr__(self, "_digits", digits)
        object.__setattr__(self, "_check", check)

    @classmethod
    def from_digits(cls, digits: str) -> OrcId:
        """Build an ORCID from its 15 base digits, computing the check character."""
        if len(digits) != ORCID_DIGIT_COUNT or not digits.isdigit() or not digits.isascii():
            raise InvalidCheckPattern(f"Expected {ORCID_DIGIT_COUNT} digits, got {digits!r}.", value=digits)
        return cls(digits + orcid_check_character(digits))

    @property
    def short(self) -> str:
        return self._digits + self._check

    @property
    def hyphenated(self) -> str:
        compact = self.short
        return "-".join(compact[index : index + 4] for index in range(0, len(compact), 4))

    @property
    def url(self) -> str:
        return ORCID_BASE_URL + self.hyphenated

    @property
    def check_character(self) -> str:
        return self._check

    def render(self, fmt: OrcidFormat = OrcidFormat.URL) -> str:
        if fmt == OrcidFormat.SHORT:
            return self.short
        if fmt == OrcidFormat.HYPHENATED:
            return self.hyphenated
        return self.url

    def __str__(self) -> str:
        return self.url


def parse_orcid(value: str) -> OrcId:
    return OrcId(value)


def render_orcid(orcid: OrcId, fmt: OrcidFormat = OrcidFormat.URL) -> str:
    return orcid.render(fmt)
