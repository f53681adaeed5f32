from __future__ import annotations

import io
import json
import logging
import re

import pytest

from bioimage_metadata.logging_config import (
    PACKAGE_LOGGER,
    ConsoleLogFormatter,
    JsonLogFormatter,
    configure_from_settings,
    configure_logging,
    parse_redact_fields,
)
from bioimage_metadata.logging_utils import structured_log
from bioimage_metadata.settings import Settings


def test_json_log_formatter_redacts_email_by_default() -> None:
    formatter = JsonLogFormatter(redact_fields=parse_redact_fields(None))
    record = logging.makeLogRecord(
        {
            "name": "tests.logging",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "author.imported",
            "args": (),
            "email": "jane.smith@example.org",
            "author": {"email": "jane.smith@example.org", "last_name": "Smith"},
        }
    )

    payload = json.loads(formatter.format(record))

    assert payload["event"] == "author.imported"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}Z", payload["timestamp"])
    assert payload["email"] == "[REDACTED]"
    assert payload["author"]["email"] == "[REDACTED]"
    assert payload["author"]["last_name"] == "Smith"


def test_parse_redact_fields_trims_and_extends_defaults() -> None:
    assert parse_redact_fields(" ORCID , , pubmed_id ") == {"email", "orcid", "pubmed_id"}


def _capture_structured_log(caplog, level, event, **fields):
    logger = logging.getLogger("tests.structured")
    with caplog.at_level(logging.DEBUG, logger="tests.structured"):
        structured_log(logger, level, event, **fields)
    return caplog.records[-1]


def test_structured_log_uses_event_as_message(caplog) -> None:
    record = _capture_structured_log(caplog, "info", "valid.rejected", entity_type="rembi.Study")
    payload = json.loads(JsonLogFormatter(redact_fields=set()).format(record))

    assert payload["event"] == "valid.rejected"
    assert payload["entity_type"] == "rembi.Study"


def test_structured_log_console_formatter(caplog) -> None:
    record = _capture_structured_log(
        caplog,
        "warning",
        "valid.decode_failed",
        entity_type="mifa.MifaContainer",
        violation_count=2,
    )
    line = ConsoleLogFormatter(redact_fields=set()).format(record)

    assert line.split(" ")[2:6] == ["WARNING", "tests.structured", "valid.decode_failed", "entity_type=mifa.MifaContainer"]
    assert line.endswith("violation_count=2")


def test_configure_logging_only_touches_package_logger() -> None:
    root_handlers = list(logging.getLogger().handlers)
    stream = io.StringIO()

    package_logger = configure_logging(level="debug", log_format="json", redact_fields={"email"}, stream=stream)
    structured_log(logging.getLogger(f"{PACKAGE_LOGGER}.valid"), "debug", "valid.rejected", email="a@b.org")

    assert package_logger.name == PACKAGE_LOGGER
    assert package_logger.propagate is False
    assert logging.getLogger().handlers == root_handlers
    payload = json.loads(stream.getvalue().strip())
    assert payload["event"] == "valid.rejected"
    assert payload["email"] == "[REDACTED]"


@pytest.mark.parametrize(("log_format", "expected_prefix"), [("json", "{"), ("console", "20")])
def test_configure_from_settings_selects_formatter(log_format: str, expected_prefix: str) -> None:
    stream = io.StringIO()
    configure_from_settings(Settings(log_level="INFO", log_format=log_format), stream=stream)

    logger = logging.getLogger(f"{PACKAGE_LOGGER}.tests")
    logger.debug("hidden")
    logger.info("shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "shown" in output
    assert output.startswith(expected_prefix)
