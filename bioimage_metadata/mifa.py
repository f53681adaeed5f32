"""MIFA model (https://www.ebi.ac.uk/bioimage-archive/mifa-model-reference/).

Metadata for AI-ready bioimage datasets. ``Author``, ``OrganisationInfo`` and
``GrantReference`` share names with REMBI entities but have different shapes;
the two namespaces are kept apart on purpose.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import Annotated, ClassVar

from pydantic import AnyUrl, AwareDatetime

from bioimage_metadata.errors import Violation, ViolationKind
from bioimage_metadata.identifiers import Doi, OrcId
from bioimage_metadata.models import (
    EMAIL,
    OPTIONAL_LIST,
    OPTIONAL_TEXT,
    REQUIRED,
    REQUIRED_LIST,
    REQUIRED_TEXT,
    OneOf,
    SpecModel,
    YearText,
)


class LicenseType(StrEnum):
    # No copyright; copy, modify and distribute without asking permission.
    CC0 = "CC0"
    # Share and adapt for any purpose with appropriate credit.
    CC_BY = "CC_BY"


class AnnotationType(StrEnum):
    CLASS_LABELS = "class_labels"
    BOUNDING_BOXES = "bounding_boxes"
    COUNTS = "counts"
    DERIVED_ANNOTATIONS = "derived_annotations"
    GEOMETRICAL_ANNOTATIONS = "geometrical_annotations"
    GRAPHS = "graphs"
    POINT_ANNOTATIONS = "point_annotations"
    SEGMENTATION_MASK = "segmentation_mask"
    TRACKS = "tracks"
    WEAK_ANNOTATIONS = "weak_annotations"
    # Described in the annotation overview.
    OTHER = "other"


class MifaModel(SpecModel):
    spec_namespace: ClassVar[str] = "mifa"


class Publications(MifaModel):
    publication_title: Annotated[str, REQUIRED_TEXT] = ""
    publication_authors: Annotated[str, REQUIRED_TEXT] = ""
    publication_doi: Annotated[Doi | None, REQUIRED] = None
    publication_year: YearText | None = None
    pubmed_id: Annotated[str | None, OPTIONAL_TEXT] = None


class OrganisationInfo(MifaModel):
    """Organisation an author is affiliated with."""

    organisation_name: Annotated[str, REQUIRED_TEXT] = ""
    address: Annotated[str | None, OPTIONAL_TEXT] = None
    ror_id: Annotated[str | None, OPTIONAL_TEXT] = None


class Author(MifaModel):
    organisation: Annotated[list[OrganisationInfo] | None, OPTIONAL_LIST] = None
    author_first_name: Annotated[str, REQUIRED_TEXT] = ""
    author_last_name: Annotated[str, REQUIRED_TEXT] = ""
    email: Annotated[str | None, OPTIONAL_TEXT, EMAIL] = None
    orcid_id: OrcId | None = None
    role: Annotated[list[str] | None, OPTIONAL_LIST] = None


class GrantReference(MifaModel):
    """Grant ID and the funding body behind the study."""

    grant_id: Annotated[str, REQUIRED_TEXT] = ""
    funder: Annotated[str, REQUIRED_TEXT] = ""


class FileLevelMetadata(MifaModel):
    annotation_id: Annotated[str, REQUIRED_TEXT] = ""
    annotation_type: Annotated[list[AnnotationType] | None, OPTIONAL_LIST, OneOf.of(AnnotationType)] = None
    source_image_id: Annotated[str, REQUIRED_TEXT] = ""
    transformations: Annotated[str | None, OPTIONAL_TEXT] = None
    spatial_information: Annotated[str | None, OPTIONAL_TEXT] = None
    annotation_creation_time: AwareDatetime | None = None


class Annotations(MifaModel):
    """A set of annotations for an AI-ready dataset."""

    authors: Annotated[list[Author] | None, OPTIONAL_LIST] = None
    file_metadata: Annotated[list[FileLevelMetadata] | None, OPTIONAL_LIST] = None
    annotation_overview: Annotated[str, REQUIRED_TEXT] = ""
    annotation_type: Annotated[list[AnnotationType] | None, OPTIONAL_LIST, OneOf.of(AnnotationType)] = None
    annotation_method: Annotated[str, REQUIRED_TEXT] = ""
    annotation_criteria: Annotated[str | None, OPTIONAL_TEXT] = None
    annotation_coverage: Annotated[str | None, OPTIONAL_TEXT] = None
    annotation_confidence_level: Annotated[str | None, OPTIONAL_TEXT] = None


class MifaContainer(MifaModel):
    publications: Annotated[Publications | None, REQUIRED] = None
    authors: Annotated[list[Author] | None, OPTIONAL_LIST] = None
    grants: Annotated[list[GrantReference] | None, OPTIONAL_LIST] = None
    link_url: Annotated[list[AnyUrl] | None, OPTIONAL_LIST] = None
    link_description: Annotated[list[str] | None, OPTIONAL_LIST] = None
    title: Annotated[str, REQUIRED_TEXT] = ""
    description: Annotated[str, REQUIRED_TEXT] = ""
    keywords: Annotated[list[str] | None, OPTIONAL_LIST] = None
    license: Annotated[LicenseType | None, REQUIRED, OneOf.of(LicenseType)] = None
    ai_models_trained: Annotated[list[str] | None, OPTIONAL_LIST] = None
    acknowledgements: Annotated[str | None, OPTIONAL_TEXT] = None
    funding_statement: Annotated[str, REQUIRED_TEXT] = ""
    annotations: Annotated[list[Annotations], REQUIRED_LIST] = []

    def cross_field_violations(self, prefix: str) -> Iterator[Violation]:
        # Descriptions pair with links by position.
        description_count = len(self.link_description or [])
        url_count = len(self.link_url or [])
        if description_count > url_count:
            yield Violation(
                ViolationKind.CONFLICTING_FIELDS,
                self.entity_name(),
                f"{prefix}link_description",
                f"{description_count} descriptions for {url_count} link_url entries",
            )
