"""REMBI model (https://www.ebi.ac.uk/bioimage-archive/rembi-model-reference/).

Recommended Metadata for Biological Images. Annotation entities are shared
with MIFA and re-exported from there.
"""

from __future__ import annotations

from typing import Annotated, ClassVar

from pydantic import AnyUrl, AwareDatetime

from bioimage_metadata.identifiers import Doi, OrcId
from bioimage_metadata.mifa import AnnotationType, Annotations, FileLevelMetadata
from bioimage_metadata.models import (
    EMAIL,
    OPTIONAL_LIST,
    OPTIONAL_TEXT,
    REQUIRED,
    REQUIRED_LIST,
    REQUIRED_TEXT,
    SIGNIFICANT_EMPTY_LIST,
    MinLength,
    OneOf,
    SpecModel,
    YearText,
)

REMBI_VERSION = "1.5"
SUPPORTED_REMBI_VERSIONS = (REMBI_VERSION,)

__all__ = [
    "REMBI_VERSION",
    "SUPPORTED_REMBI_VERSIONS",
    "Affiliation",
    "AnnotationType",
    "Annotations",
    "Author",
    "Biosample",
    "FileLevelMetadata",
    "Funding",
    "GrantReference",
    "ImageAcquisition",
    "ImageAnalysis",
    "ImageCorrelation",
    "ImagingMethod",
    "License",
    "Link",
    "Organism",
    "OrganisationInfo",
    "OrganisationUrl",
    "Publication",
    "RembiStudy",
    "Specimen",
    "Study",
    "StudyComponent",
]


class RembiModel(SpecModel):
    spec_namespace: ClassVar[str] = "rembi"


class OrganisationUrl(RembiModel):
    name: Annotated[str, REQUIRED_TEXT, MinLength(1)] = ""
    # Public registry entry for the organisation; ROR recommended.
    url: Annotated[AnyUrl | None, REQUIRED] = None


class OrganisationInfo(RembiModel):
    name: Annotated[str, REQUIRED_TEXT] = ""
    address: Annotated[str | None, OPTIONAL_TEXT] = None


# Decoded by shape: a ``url`` key selects OrganisationUrl.
Affiliation = OrganisationInfo | OrganisationUrl


class Author(RembiModel):
    """A person contributing to a study or annotation."""

    last_name: Annotated[str, REQUIRED_TEXT] = ""
    first_name: Annotated[str, REQUIRED_TEXT] = ""
    email: Annotated[str | None, OPTIONAL_TEXT, EMAIL] = None
    orcid: OrcId | None = None
    affiliation: Annotated[Affiliation | None, REQUIRED] = None
    role: Annotated[str | None, OPTIONAL_TEXT] = None


class GrantReference(RembiModel):
    identifier: Annotated[str, REQUIRED_TEXT] = ""
    funder: Annotated[str, REQUIRED_TEXT] = ""


class Funding(RembiModel):
    funding_statement: Annotated[str, REQUIRED_TEXT] = ""
    grant_references: Annotated[list[GrantReference] | None, OPTIONAL_LIST] = None


class Publication(RembiModel):
    title: Annotated[str, REQUIRED_TEXT, MinLength(1)] = ""
    authors: Annotated[list[Author] | None, OPTIONAL_LIST] = None
    doi: Doi | None = None
    year: YearText | None = None
    pubmed_id: Annotated[str | None, OPTIONAL_TEXT] = None


class Link(RembiModel):
    link_url: Annotated[AnyUrl | None, REQUIRED] = None
    link_type: Annotated[str | None, OPTIONAL_TEXT] = None
    link_description: Annotated[str | None, OPTIONAL_TEXT] = None


class StudyComponent(RembiModel):
    name: Annotated[str, REQUIRED_TEXT] = ""
    description: Annotated[str, REQUIRED_TEXT] = ""
    rembi_version: Annotated[str, REQUIRED_TEXT, OneOf.of(SUPPORTED_REMBI_VERSIONS)] = REMBI_VERSION


class Organism(RembiModel):
    scientific_name: Annotated[str, REQUIRED_TEXT] = ""
    common_name: Annotated[str | None, OPTIONAL_TEXT] = None
    ncbi_taxon: Annotated[str, REQUIRED_TEXT, MinLength(1)] = ""


class Biosample(RembiModel):
    """Biological entity that was imaged.

    For the variable lists an empty list means "no explicit variables" (for
    example a control) and is kept distinct from "not recorded".
    """

    organism: Annotated[Organism | None, REQUIRED] = None
    biological_entity: Annotated[str, REQUIRED_TEXT] = ""
    description: Annotated[str | None, OPTIONAL_TEXT] = None
    intrinsic_variables: Annotated[list[str] | None, SIGNIFICANT_EMPTY_LIST] = None
    extrinsic_variables: Annotated[list[str] | None, SIGNIFICANT_EMPTY_LIST] = None
    experimental_variables: Annotated[list[str] | None, SIGNIFICANT_EMPTY_LIST] = None


class Specimen(RembiModel):
    sample_preparation: Annotated[str, REQUIRED_TEXT] = ""
    growth_protocol: Annotated[str | None, OPTIONAL_TEXT] = None


class ImagingMethod(RembiModel):
    value: Annotated[str, REQUIRED_TEXT] = ""
    ontology_name: Annotated[str, REQUIRED_TEXT] = ""
    ontology_id: Annotated[AnyUrl | None, REQUIRED] = None


class ImageAcquisition(RembiModel):
    imaging_method: Annotated[ImagingMethod | None, REQUIRED] = None
    imaging_instrument: Annotated[str, REQUIRED_TEXT] = ""
    image_acquisition_parameters: Annotated[str, REQUIRED_TEXT] = ""


class ImageCorrelation(RembiModel):
    spatial_and_temporal_alignment: Annotated[str, REQUIRED_TEXT] = ""
    fiducials_used: Annotated[str, REQUIRED_TEXT] = ""
    transformation_matrix: Annotated[str, REQUIRED_TEXT] = ""


class ImageAnalysis(RembiModel):
    analysis_overview: Annotated[str, REQUIRED_TEXT] = ""


class License(RembiModel):
    pass


class Study(RembiModel):
    title: Annotated[str, REQUIRED_TEXT, MinLength(25)] = ""
    description: Annotated[str, REQUIRED_TEXT, MinLength(25)] = ""
    private_until_date: Annotated[AwareDatetime | None, REQUIRED] = None
    # No delimiter is prescribed for keywords.
    keywords: Annotated[str, REQUIRED_TEXT] = ""
    authors: Annotated[list[Author], REQUIRED_LIST] = []
    license: License | None = None
    funding: Funding | None = None
    publications: Annotated[list[Publication] | None, OPTIONAL_LIST] = None
    links: Annotated[list[Link] | None, OPTIONAL_LIST] = None
    acknowledgements: Annotated[str | None, OPTIONAL_TEXT] = None
    rembi_version: Annotated[str, REQUIRED_TEXT, OneOf.of(SUPPORTED_REMBI_VERSIONS)] = REMBI_VERSION


class RembiStudy(RembiModel):
    study: Annotated[Study | None, REQUIRED] = None
    study_components: Annotated[list[StudyComponent], REQUIRED_LIST] = []
    sample: Annotated[list[Biosample], REQUIRED_LIST] = []
    specimen: Annotated[list[Specimen], REQUIRED_LIST] = []
    image_acquisition: Annotated[list[ImageAcquisition], REQUIRED_LIST] = []
    image_correlation: ImageCorrelation | None = None
    image_analysis: ImageAnalysis | None = None
    annotations: Annotations | None = None
