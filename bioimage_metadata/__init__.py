"""Typed MIFA / REMBI metadata models with a validation gate for serialization."""

from bioimage_metadata import mifa, rembi
from bioimage_metadata.errors import DeserializationError, EntityValidationError, Violation, ViolationKind
from bioimage_metadata.identifiers import (
    Doi,
    DoiFormat,
    IdentifierParseError,
    InvalidCheckPattern,
    NotADocumentIdentifier,
    OrcId,
    OrcidFormat,
    UnrecognizedIdentifierShape,
    parse_doi,
    parse_orcid,
    render_doi,
    render_orcid,
)
from bioimage_metadata.models import SpecModel
from bioimage_metadata.valid import Valid

__all__ = [
    "DeserializationError",
    "Doi",
    "DoiFormat",
    "EntityValidationError",
    "IdentifierParseError",
    "InvalidCheckPattern",
    "NotADocumentIdentifier",
    "OrcId",
    "OrcidFormat",
    "SpecModel",
    "UnrecognizedIdentifierShape",
    "Valid",
    "Violation",
    "ViolationKind",
    "mifa",
    "parse_doi",
    "parse_orcid",
    "rembi",
    "render_doi",
    "render_orcid",
]
