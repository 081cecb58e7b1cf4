"""Content-negotiated BibTeX retrieval from a DOI resolver."""

from __future__ import annotations

import logging
import os
from urllib.parse import urljoin

import requests

from errors import RedirectLimitExceeded
from models import RawRecord

BIBTEX_ACCEPT_HEADER = "application/x-bibtex"
REQUEST_TIMEOUT_SECONDS = float(os.getenv("CITATION_TIMEOUT_SECONDS", "20"))
MAX_REDIRECTS = int(os.getenv("CITATION_MAX_REDIRECTS", "10"))

LOGGER = logging.getLogger(__name__)


def fetch_bibtex(
    uri: str | None,
    timeout: float | None = None,
    max_redirects: int | None = None,
) -> RawRecord | None:
    """Fetch the BibTeX record for ``uri``, following redirects by hand.

    The resolver hands off to registrar hosts (DataCite, Crossref) and each
    hop must carry the Accept header, so every hop is issued explicitly and
    the hop count stays bounded.

    Args:
        uri: Fully qualified resolver URI.
        timeout: Per-request timeout in seconds; defaults to
            REQUEST_TIMEOUT_SECONDS.
        max_redirects: Maximum number of Location hops before giving up;
            defaults to MAX_REDIRECTS.

    Raises:
        RedirectLimitExceeded: The resolver redirected more than max_redirects times.
        requests.RequestException: Any transport failure, unchanged.
    """
    if uri is None or not uri.strip():
        return None

    timeout = REQUEST_TIMEOUT_SECONDS if timeout is None else timeout
    max_redirects = MAX_REDIRECTS if max_redirects is None else max_redirects
    headers = {"Accept": BIBTEX_ACCEPT_HEADER}

    current = uri
    redirects = 0
    while True:
        response = requests.get(
            current,
            headers=headers,
            allow_redirects=False,
            timeout=timeout,
        )
        location = response.headers.get("Location")
        if not location:
            break

        if redirects >= max_redirects:
            raise RedirectLimitExceeded(uri, max_redirects)
        redirects += 1
        next_uri = urljoin(current, location)
        LOGGER.debug(
            "BibTeX fetch: status=%s redirect %s/%s %s -> %s",
            response.status_code,
            redirects,
            max_redirects,
            current,
            next_uri,
        )
        current = next_uri

    LOGGER.debug(
        "BibTeX fetch: uri=%s final_url=%s status=%s redirects=%s",
        uri,
        current,
        response.status_code,
        redirects,
    )
    return RawRecord(
        status_code=response.status_code,
        body=response.text,
        url=current,
        redirects=redirects,
    )
