from bioimage_metadata.identifiers.doi import Doi, parse_doi, render_doi
from bioimage_metadata.identifiers.errors import (
    IdentifierParseError,
    InvalidCheckPattern,
    NotADocumentIdentifier,
    UnrecognizedIdentifierShape,
)
from bioimage_metadata.identifiers.orcid import OrcId, orcid_check_character, parse_orcid, render_orcid
from bioimage_metadata.identifiers.types import DoiFormat, IdentifierKind, OrcidFormat

__all__ = [
    "Doi",
    "DoiFormat",
    "IdentifierKind",
    "IdentifierParseError",
    "InvalidCheckPattern",
    "NotADocumentIdentifier",
    "OrcId",
    "OrcidFormat",
    "UnrecognizedIdentifierShape",
    "orcid_check_character",
    "parse_doi",
    "parse_orcid",
    "render_doi",
    "render_orcid",
]
