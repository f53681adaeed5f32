from __future__ import annotations

import re

ORCID_HOST = "orcid.org"
ORCID_BASE_URL = f"https://{ORCID_HOST}/"
ORCID_BASE_URL_HTTP = f"http://{ORCID_HOST}/"
ORCID_DIGIT_COUNT = 15

ORCID_HTTPS_RE = re.compile(r"^https://orcid\.org/([^/?#\s]+)/?$", re.I)
ORCID_HTTP_RE = re.compile(r"^http://orcid\.org/([^/?#\s]+)/?$", re.I)
ORCID_BARE_RE = re.compile(r"^[0-9Xx-]+$")
ORCID_CHECK_RE = re.compile(r"^[0-9]{15}[0-9X]$")

DOI_SCHEME = "doi:"
DOI_BASE_URL = "https://doi.org/"
DOI_SCHEME_MARKERS = ("doi:", "info:doi/")
DOI_PROXY_HOSTS = frozenset({"doi.org", "dx.doi.org", "www.doi.org"})
DOI_SEPARATOR = "/"
DOI_PREFIX_START = "10."
DOI_OPAQUE_NAME_RE = re.compile(r"(?:^|[:/])(10\..*)$", re.S)
WHITESPACE_RE = re.compile(r"\s")
