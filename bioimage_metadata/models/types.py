from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

MAX_YEAR = 65_535


def _parse_year(value: Any) -> Any:
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit() or not text.isascii():
            raise ValueError(f"Year must be written as digits, got {value!r}.")
        value = int(text)
    if isinstance(value, int) and not isinstance(value, bool) and not 0 <= value <= MAX_YEAR:
        raise ValueError(f"Year must be between 0 and {MAX_YEAR}, got {value}.")
    return value


# Years are free text in both specifications: strings on the wire, ints here.
YearText = Annotated[int, BeforeValidator(_parse_year), PlainSerializer(str, return_type=str)]
