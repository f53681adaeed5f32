"""Structured logging helper shared by the gate and any embedding application."""

from __future__ import annotations

import logging
from typing import Any


def structured_log(
    logger: logging.Logger,
    level: str,
    event: str,
    /,
    **fields: Any,
) -> None:
    """Emit a structured log entry.

    The event name is the log message; ``fields`` travel as record extras and
    are rendered (and redacted) by the formatters in ``logging_config``.

    Usage:
        structured_log(logger, "debug", "valid.rejected", entity="rembi.Study", violation_count=2)
    """
    log_method = getattr(logger, level.lower())
    log_method(event, extra=fields)
