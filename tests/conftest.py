from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

from bioimage_metadata import mifa, rembi
from bioimage_metadata.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def rembi_author() -> rembi.Author:
    return rembi.Author(
        last_name="Smith",
        first_name="Jane",
        email="jane.smith@example.org",
        orcid="0000-0002-1825-0097",
        affiliation=rembi.OrganisationInfo(name="EMBL-EBI", address="Wellcome Genome Campus, Hinxton"),
        role="Corresponding author",
    )


@pytest.fixture
def rembi_study(rembi_author: rembi.Author) -> rembi.RembiStudy:
    study = rembi.Study(
        title="Light sheet atlas of zebrafish development",
        description="Whole-embryo light sheet imaging across early developmental stages.",
        private_until_date=datetime(2030, 1, 1, tzinfo=timezone.utc),
        keywords="zebrafish, light sheet, development",
        authors=[rembi_author],
        funding=rembi.Funding(
            funding_statement="Supported by Wellcome.",
            grant_references=[rembi.GrantReference(identifier="WT-218000", funder="Wellcome")],
        ),
        publications=[
            rembi.Publication(
                title="A light sheet atlas of zebrafish development",
                doi="https://doi.org/10.1234/deadbeef",
                year=2021,
            )
        ],
        links=[
            rembi.Link(link_url="https://www.ebi.ac.uk/bioimage-archive/", link_type="archive"),
        ],
    )
    return rembi.RembiStudy(
        study=study,
        study_components=[
            rembi.StudyComponent(name="Stage series", description="Embryos imaged from 6 to 48 hpf."),
        ],
        sample=[
            rembi.Biosample(
                organism=rembi.Organism(
                    scientific_name="Danio rerio",
                    common_name="zebrafish",
                    ncbi_taxon="NCBITaxon_7955",
                ),
                biological_entity="whole embryo",
                intrinsic_variables=[],
                experimental_variables=["developmental stage"],
            )
        ],
        specimen=[rembi.Specimen(sample_preparation="Fixed and optically cleared.")],
        image_acquisition=[
            rembi.ImageAcquisition(
                imaging_method=rembi.ImagingMethod(
                    value="light sheet fluorescence microscopy",
                    ontology_name="Biological Imaging Methods Ontology (FBbi)",
                    ontology_id="http://purl.obolibrary.org/obo/FBbi_00000369",
                ),
                imaging_instrument="Zeiss Lightsheet 7",
                image_acquisition_parameters="20x objective, 1 um z-step",
            )
        ],
    )


@pytest.fixture
def mifa_container() -> mifa.MifaContainer:
    return mifa.MifaContainer(
        publications=mifa.Publications(
            publication_title="A benchmark for nuclei segmentation",
            publication_authors="Smith J, Doe A",
            publication_doi="doi:10.1234/deadbeef",
            publication_year=2021,
        ),
        authors=[
            mifa.Author(
                author_first_name="Jane",
                author_last_name="Smith",
                email="jane.smith@example.org",
                orcid_id="http://orcid.org/0000-0002-1825-0097",
                organisation=[mifa.OrganisationInfo(organisation_name="EMBL-EBI", ror_id="https://ror.org/02catss52")],
                role=["annotator"],
            )
        ],
        grants=[mifa.GrantReference(grant_id="WT-218000", funder="Wellcome")],
        link_url=["https://example.org/datasets/nuclei"],
        link_description=["Dataset landing page"],
        title="Nuclei segmentation masks for fluorescence images",
        description="Manually curated nuclei masks for AI training.",
        keywords=["segmentation", "nuclei"],
        license=mifa.LicenseType.CC_BY,
        funding_statement="Supported by Wellcome.",
        annotations=[
            mifa.Annotations(
                annotation_overview="Instance masks of nuclei.",
                annotation_method="Manual painting in napari.",
                annotation_type=[mifa.AnnotationType.SEGMENTATION_MASK],
                file_metadata=[
                    mifa.FileLevelMetadata(
                        annotation_id="mask-0001",
                        source_image_id="image-0001",
                        annotation_type=["segmentation_mask"],
                        annotation_creation_time=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
                    )
                ],
            )
        ],
    )
