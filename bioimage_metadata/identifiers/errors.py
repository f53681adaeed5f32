from __future__ import annotations


class IdentifierParseError(ValueError):
    """Text could not be normalized into a canonical identifier."""

    def __init__(self, message: str, *, value: str) -> None:
        super().__init__(message)
        self.value = value


class UnrecognizedIdentifierShape(IdentifierParseError):
    """Input is not one of the accepted ORCID shapes."""


class InvalidCheckPattern(IdentifierParseError):
    """ORCID segment has the wrong length, characters or check digit."""


class NotADocumentIdentifier(IdentifierParseError):
    """Input does not carry a prefix/suffix DOI name."""
