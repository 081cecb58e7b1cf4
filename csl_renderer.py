"""CSL rendering of parsed BibTeX records via citeproc-py."""

from __future__ import annotations

import logging
import os

from citeproc import (
    Citation,
    CitationItem,
    CitationStylesBibliography,
    CitationStylesStyle,
    formatter,
)
from citeproc.source.json import CiteProcJSON
from citeproc_styles import get_style_filepath
from citeproc_styles.errors import StyleNotFoundError

from bibtex_records import entry_to_csl_json
from errors import StyleNotFound
from models import BibRecord
from postprocess import postprocess_citation

DEFAULT_STYLE = "chicago-author-date"

LOGGER = logging.getLogger(__name__)


def build_citation(
    uri: str | None,
    work_type: str,
    record: BibRecord | None,
    style: str = DEFAULT_STYLE,
) -> str | None:
    """Render the first entry of ``record`` and clean up the result for display.

    Returns None when the inputs are unusable or citeproc produces nothing.

    Raises:
        StyleNotFound: ``style`` is neither a known CSL style nor a .csl file.
    """
    if not uri or record is None or record.is_empty or not record.first.key:
        return None

    rendered = render_bibliography_entry(record, style)
    if not rendered:
        LOGGER.debug("citeproc produced no output for key=%s style=%s", record.first.key, style)
        return None

    return postprocess_citation(rendered, work_type, uri)


def render_bibliography_entry(record: BibRecord, style: str = DEFAULT_STYLE) -> str | None:
    """Render one HTML bibliography entry keyed by the record's first entry."""
    source = CiteProcJSON([entry_to_csl_json(entry) for entry in record.entries])
    bibliography = CitationStylesBibliography(load_style(style), source, formatter.html)
    bibliography.register(Citation([CitationItem(record.first.key)]))

    items = bibliography.bibliography()
    if not items:
        return None
    return str(items[0]).strip() or None


def load_style(style: str) -> CitationStylesStyle:
    """Load a CSL style by repository name (e.g. "apa") or .csl file path."""
    if style.endswith(".csl") and os.path.isfile(style):
        path = style
    else:
        try:
            path = get_style_filepath(style)
        except StyleNotFoundError as exc:
            raise StyleNotFound(f"Unknown citation style: {style}") from exc
    return CitationStylesStyle(path, validate=False)
