"""Resolve a DOI to a styled HTML citation.

``fetch_citation`` is the only entry point callers need. It never raises: every
failure is logged and reported as ``None`` so the caller can simply omit the
citation.
"""

from __future__ import annotations

import logging

import requests

from bibtex_client import fetch_bibtex
from bibtex_records import parse_bibtex
from csl_renderer import DEFAULT_STYLE, build_citation
from doi import doi_to_uri
from errors import CitationError
from models import BibRecord
from work_types import determine_work_type

LOGGER = logging.getLogger(__name__)
LOGGER.addHandler(logging.NullHandler())


def fetch_citation(
    doi: str | None,
    work_type: str | None = "",
    style: str | None = DEFAULT_STYLE,
    debug: bool = False,
    logger: logging.Logger | None = None,
    timeout: float | None = None,
    max_redirects: int | None = None,
) -> str | None:
    """Fetch the BibTeX for ``doi`` and render it as a citation.

    Args:
        doi: DOI in any of the forms '10.x/y', 'doi:10.x/y' or a resolver URL.
        work_type: Label shown after the title, e.g. "dataset". Inferred from
            the record when blank.
        style: CSL style name; defaults to chicago-author-date.
        debug: Log the resolved URI, fetch outcome and citation at DEBUG level.
        logger: Diagnostics sink; defaults to this module's logger, which is
            silent unless the application configures logging.
        timeout: Per-request timeout in seconds.
        max_redirects: Maximum resolver redirects to follow.
    """
    log = logger or LOGGER
    uri = doi_to_uri(doi)
    if uri is None:
        return None

    record: BibRecord | None = None
    try:
        if debug:
            log.debug("Citation: fetching BibTeX from uri=%s", uri)
        response = fetch_bibtex(uri, timeout=timeout, max_redirects=max_redirects)
        if response is None or response.status_code != 200:
            log.warning(
                "Citation: no BibTeX for uri=%s status=%s",
                uri,
                response.status_code if response else None,
            )
            return None

        record = parse_bibtex(response.body)
        if debug:
            log.debug(
                "Citation: received BibTeX from %s after %s redirect(s): %s",
                response.url,
                response.redirects,
                record,
            )

        if not work_type or not work_type.strip():
            work_type = determine_work_type(record)

        citation = build_citation(
            uri=uri,
            work_type=work_type,
            record=record,
            style=style or DEFAULT_STYLE,
        )
        if debug:
            log.debug("Citation: rendered uri=%s citation=%s", uri, citation)
        return citation
    except (requests.RequestException, CitationError) as exc:
        log.warning("Citation: failed for uri=%s: %s", uri, exc)
        return None
    except Exception as exc:  # citeproc and bibtexparser raise arbitrary types
        log.exception("Citation: unexpected failure for uri=%s record=%s: %s", uri, record, exc)
        return None
