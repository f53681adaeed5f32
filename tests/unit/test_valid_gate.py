from __future__ import annotations

import copy
import json
import logging
import pickle

import pytest
from pydantic import BaseModel, ValidationError

from bioimage_metadata import mifa, rembi
from bioimage_metadata.errors import DeserializationError, EntityValidationError, ViolationKind
from bioimage_metadata.identifiers import Doi, OrcId
from bioimage_metadata.settings import Settings
from bioimage_metadata.valid import Valid


def test_try_new_accepts_valid_entities(rembi_study: rembi.RembiStudy) -> None:
    wrapped = Valid.try_new(rembi_study)
    assert wrapped.inner == rembi_study
    assert wrapped.entity_type is rembi.RembiStudy


def test_try_new_rejects_missing_required_field_and_returns_value(rembi_study: rembi.RembiStudy) -> None:
    rembi_study.study = None
    before = rembi_study.model_dump()

    with pytest.raises(EntityValidationError) as excinfo:
        Valid.try_new(rembi_study)

    error = excinfo.value
    assert error.value is rembi_study
    assert rembi_study.model_dump() == before
    assert error.entity == "rembi.RembiStudy"
    [violation] = error.violations
    assert violation.kind == ViolationKind.MISSING_FIELD
    assert violation.field == "study"


def test_try_new_rejects_every_invalid_entity() -> None:
    for entity in (rembi.RembiStudy(), rembi.Study(), mifa.MifaContainer(), rembi.Link()):
        assert not entity.is_valid()
        with pytest.raises(EntityValidationError):
            Valid.try_new(entity)


def test_direct_construction_is_not_possible(rembi_study: rembi.RembiStudy) -> None:
    with pytest.raises(TypeError):
        Valid(rembi_study)


def test_wrapper_is_immutable(rembi_study: rembi.RembiStudy) -> None:
    wrapped = Valid.try_new(rembi_study)
    with pytest.raises(AttributeError):
        wrapped._value = rembi.RembiStudy()


def test_wrapper_is_isolated_from_caller_mutation(rembi_study: rembi.RembiStudy) -> None:
    wrapped = Valid.try_new(rembi_study)
    rembi_study.study.title = "Too short"

    view = wrapped.inner
    view.study.title = "Also short"

    assert wrapped.inner.study.title == "Light sheet atlas of zebrafish development"
    assert wrapped.inner.is_valid()


def test_into_inner_then_rewrap_revalidates(rembi_study: rembi.RembiStudy) -> None:
    wrapped = Valid.try_new(rembi_study)
    raw = wrapped.into_inner()
    raw.study.description = "short"
    with pytest.raises(EntityValidationError):
        Valid.try_new(raw)

    raw.study.description = "A longer description of the whole study and its aims."
    assert Valid.try_new(raw).inner.study.description == raw.study.description


def test_serialization_matches_bare_entity(rembi_study: rembi.RembiStudy) -> None:
    wrapped = Valid.try_new(rembi_study)
    assert wrapped.to_json() == rembi_study.model_dump_json()
    assert wrapped.to_dict() == rembi_study.model_dump(mode="json")


def test_round_trip_through_json(rembi_study: rembi.RembiStudy, mifa_container: mifa.MifaContainer) -> None:
    wrapped_study = Valid.try_new(rembi_study)
    wrapped_container = Valid.try_new(mifa_container)
    assert Valid.from_json(rembi.RembiStudy, wrapped_study.to_json()) == wrapped_study
    assert Valid.from_json(mifa.MifaContainer, wrapped_container.to_json()) == wrapped_container
    assert Valid.from_dict(rembi.RembiStudy, wrapped_study.to_dict()) == wrapped_study


def test_from_json_reports_structural_violation_with_entity_and_field(rembi_study: rembi.RembiStudy) -> None:
    payload = json.loads(rembi_study.model_dump_json())
    payload["study"]["title"] = "Too short"

    with pytest.raises(DeserializationError) as excinfo:
        Valid.from_json(rembi.RembiStudy, json.dumps(payload))

    error = excinfo.value
    assert error.entity == "rembi.RembiStudy"
    assert [violation.kind for violation in error.violations] == [ViolationKind.TOO_SHORT]
    assert "study.title" in str(error)
    assert "rembi.Study" in str(error)
    assert isinstance(error.__cause__, EntityValidationError)


def test_from_json_reports_decode_failures(rembi_study: rembi.RembiStudy) -> None:
    payload = json.loads(rembi_study.model_dump_json())
    payload["study"]["authors"][0]["orcid"] = "0000-0002-1825-0098"

    with pytest.raises(DeserializationError) as excinfo:
        Valid.from_json(rembi.RembiStudy, json.dumps(payload))

    error = excinfo.value
    assert error.violations == ()
    assert error.errors
    assert "study.authors.0.orcid" in str(error)
    assert isinstance(error.__cause__, ValidationError)


def test_from_json_rejects_malformed_text() -> None:
    with pytest.raises(DeserializationError) as excinfo:
        Valid.from_json(rembi.RembiStudy, "{not json")
    assert excinfo.value.entity == "rembi.RembiStudy"


def test_gate_works_as_pydantic_field(rembi_study: rembi.RembiStudy) -> None:
    class Submission(BaseModel):
        accession: str
        study: Valid[rembi.RembiStudy]

    submission = Submission.model_validate({"accession": "S-BIAD1", "study": rembi_study.model_dump(mode="json")})
    assert isinstance(submission.study, Valid)
    assert submission.study == Valid.try_new(rembi_study)
    assert submission.model_dump(mode="json")["study"] == rembi_study.model_dump(mode="json")

    invalid = rembi_study.model_dump(mode="json")
    invalid["study"]["title"] = "Too short"
    with pytest.raises(ValidationError, match="failed validation"):
        Submission.model_validate({"accession": "S-BIAD1", "study": invalid})


def test_copies_share_the_wrapped_snapshot(rembi_study: rembi.RembiStudy) -> None:
    valid = Valid.try_new(rembi_study)
    assert copy.copy(valid) is valid
    assert copy.deepcopy(valid) is valid


def test_models_holding_a_gate_can_be_deep_copied(rembi_study: rembi.RembiStudy) -> None:
    class Submission(BaseModel):
        accession: str
        study: Valid[rembi.RembiStudy]

    submission = Submission(accession="S-BIAD1", study=Valid.try_new(rembi_study))
    duplicate = submission.model_copy(deep=True)
    assert duplicate == submission
    assert duplicate.study is submission.study


def test_pickle_round_trip_revalidates(mifa_container: mifa.MifaContainer) -> None:
    container = mifa_container.model_copy(update={"link_url": None, "link_description": None})
    valid = Valid.try_new(container)
    restored = pickle.loads(pickle.dumps(valid))
    assert isinstance(restored, Valid)
    assert restored == valid
    assert restored.to_json() == valid.to_json()

    rebuild, (entity_gate, _) = valid.__reduce__()
    with pytest.raises(EntityValidationError):
        rebuild(entity_gate, mifa.MifaContainer())


def test_identifiers_survive_pickling() -> None:
    orcid = OrcId("0000-0002-1825-0097")
    doi = Doi("doi:10.1234/deadbeef")
    assert pickle.loads(pickle.dumps(orcid)) == orcid
    assert pickle.loads(pickle.dumps(doi)) == doi


def test_rejections_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="bioimage_metadata.valid"):
        with pytest.raises(EntityValidationError):
            Valid.try_new(rembi.RembiStudy())

    record = caplog.records[-1]
    assert record.getMessage() == "valid.rejected"
    assert record.entity_type == "rembi.RembiStudy"
    assert record.violated_fields == ["study"]


def test_rejection_logging_can_be_disabled(
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr("bioimage_metadata.valid.settings", Settings(log_rejections=False))
    with caplog.at_level(logging.DEBUG, logger="bioimage_metadata.valid"):
        with pytest.raises(EntityValidationError):
            Valid.try_new(rembi.RembiStudy())
    assert caplog.records == []
