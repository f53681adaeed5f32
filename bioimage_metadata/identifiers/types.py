from __future__ import annotations

from enum import StrEnum


class IdentifierKind(StrEnum):
    ORCID = "orcid"
    DOI = "doi"


class OrcidFormat(StrEnum):
    URL = "url"
    HYPHENATED = "hyphenated"
    SHORT = "short"


class DoiFormat(StrEnum):
    NAME = "name"
    SCHEME = "scheme"
    DOI_ORG = "doi_org"
