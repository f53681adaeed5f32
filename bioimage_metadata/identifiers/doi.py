"""Digital object identifiers.

Any address that carries a DOI name is accepted (``doi:`` and other URIs, the
doi.org resolver with or without a scheme, publisher landing pages). Only the
lower-cased ``prefix/suffix`` name is kept. Validation is syntactic; nothing
is resolved.
"""

from __future__ import annotations

from urllib.parse import SplitResult, unquote, urlsplit

from bioimage_metadata.identifiers.base import CanonicalIdentifier
from bioimage_metadata.identifiers.constants import (
    DOI_BASE_URL,
    DOI_OPAQUE_NAME_RE,
    DOI_PREFIX_START,
    DOI_PROXY_HOSTS,
    DOI_SCHEME,
    DOI_SCHEME_MARKERS,
    DOI_SEPARATOR,
    WHITESPACE_RE,
)
from bioimage_metadata.identifiers.errors import NotADocumentIdentifier
from bioimage_metadata.identifiers.types import DoiFormat, IdentifierKind


def _strip_scheme_marker(text: str) -> str | None:
    lowered = text.lower()
    for marker in DOI_SCHEME_MARKERS:
        if lowered.startswith(marker):
            return text[len(marker) :]
    return None


def _strip_proxy_host(text: str) -> str | None:
    """Path of a resolver address written without a scheme, e.g. ``doi.org/10.1/x``."""
    try:
        parsed = urlsplit(f"//{text}")
        host = parsed.hostname
    except ValueError:
        return None
    if host not in DOI_PROXY_HOSTS:
        return None
    return unquote(parsed.path).lstrip("/")


def _name_from_path(path: str) -> str:
    segments = [segment for segment in path.split("/") if segment]
    for index, segment in enumerate(segments):
        if segment.startswith(DOI_PREFIX_START):
            return DOI_SEPARATOR.join(segments[index:])
    return DOI_SEPARATOR.join(segments[-2:])


def _name_from_opaque_path(path: str) -> str | None:
    # urn:doi:10.1/x, hdl:10.1/x
    match = DOI_OPAQUE_NAME_RE.search(path)
    return match.group(1) if match else None


def _split_address(text: str) -> SplitResult:
    try:
        parsed = urlsplit(text)
    except ValueError as exc:
        raise NotADocumentIdentifier(f"Malformed DOI address {text!r}.", value=text) from exc
    return parsed


def _extract_name(text: str) -> str:
    remainder = _strip_scheme_marker(text)
    if remainder is not None:
        return remainder

    parsed = _split_address(text)
    if not parsed.scheme:
        proxied = _strip_proxy_host(text)
        return text if proxied is None else proxied

    path = unquote(parsed.path)
    if not parsed.netloc:
        name = _name_from_opaque_path(path)
        if name is None:
            raise NotADocumentIdentifier(f"No DOI name in {text!r}.", value=text)
        return name
    if parsed.scheme.lower() in {"http", "https"} and parsed.hostname in DOI_PROXY_HOSTS:
        return path.lstrip("/")
    return _name_from_path(path)


def _normalize_doi_name(value: str) -> str:
    name = _extract_name(value.strip())
    prefix, separator, suffix = name.partition(DOI_SEPARATOR)
    if not separator or not prefix or not suffix:
        raise NotADocumentIdentifier(f"No prefix/suffix in DOI {value!r}.", value=value)
    if WHITESPACE_RE.search(name):
        raise NotADocumentIdentifier(f"DOI name contains whitespace: {value!r}.", value=value)
    # A name that still reads as an address would normalize differently on reparse.
    if ":" in prefix or _strip_proxy_host(name) is not None:
        raise NotADocumentIdentifier(f"Nested address in DOI {value!r}.", value=value)
    return name.lower()


class Doi(CanonicalIdentifier):
    __slots__ = ("_name",)

    kind = IdentifierKind.DOI
    json_schema_examples = ("10.1234/example",)

    def __init__(self, value: str) -> None:
        object.__setattr__(self, "_name", _normalize_doi_name(value))

    @property
    def name(self) -> str:
        return self._name

    @property
    def prefix(self) -> str:
        return self._name.partition(DOI_SEPARATOR)[0]

    @property
    def suffix(self) -> str:
        return self._name.partition(DOI_SEPARATOR)[2]

    @property
    def url(self) -> str:
        return DOI_BASE_URL + self._name

    def render(self, fmt: DoiFormat = DoiFormat.NAME) -> str:
        if fmt == DoiFormat.SCHEME:
            return DOI_SCHEME + self._name
        if fmt == DoiFormat.DOI_ORG:
            return self.url
        return self._name

    def __str__(self) -> str:
        return self._name


def parse_doi(value: str) -> Doi:
    return Doi(value)


def render_doi(doi: Doi, fmt: DoiFormat = DoiFormat.NAME) -> str:
    return doi.render(fmt)
