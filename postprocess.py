"""Text repairs applied to citeproc output before it is shown to users.

Each transform is a plain ``str -> str`` function so it can be tested on its
own; ``postprocess_citation`` applies them in the required order.
"""

from __future__ import annotations

import re

from work_types import humanize_work_type

# citeproc cannot map this LaTeX command to a character and leaves it verbatim.
_ENDASH_RE = re.compile(r"\{\\textendash\}", re.IGNORECASE)

# chicago-author-date closes the quoted title with `.”`; some engines emit `”.`.
_QUOTE_BOUNDARY_RE = re.compile(r"(\.”|”\.)\s+")
# apa closes the italic title with `</i>.`.
_ITALIC_BOUNDARY_RE = re.compile(r"(</i>\.)\s*")

_URL_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*://[^\s<>\"']+")
_TRAILING_PUNCTUATION = ".,;)"
_DOI_URL_RE = re.compile(r"^https?://(?:dx\.)?doi\.org/(.+)$", re.IGNORECASE)


def repair_endash(citation: str) -> str:
    return _ENDASH_RE.sub("-", citation)


def strip_braces(citation: str) -> str:
    """Remove the braces BibTeX uses to protect all-caps words."""
    return citation.replace("{", "").replace("}", "")


def annotate_work_type(citation: str, work_type: str) -> str:
    """Insert "[Work type]. " after the title sentence.

    Both the quoted-title boundary and the italic-title boundary are handled,
    each at most once. A citation with neither boundary is returned unchanged.
    Styles that italicize the container instead of the title (e.g. ieee) get
    the label after the first italic run, which is then the container.
    """
    if not work_type or not work_type.strip():
        return citation

    label = f"[{humanize_work_type(work_type)}]. "
    citation = _QUOTE_BOUNDARY_RE.sub(
        lambda match: f"{match.group(1)} {label}", citation, count=1
    )
    return _ITALIC_BOUNDARY_RE.sub(
        lambda match: f"{match.group(1)} {label}", citation, count=1
    )


def link_urls(citation: str, uri: str) -> str:
    """Wrap every http(s) URL in an anchor, by default followed by one period.

    A URL naming the same DOI as ``uri`` is rewritten to ``uri`` itself; any
    other URL links to its own text. Trailing sentence punctuation is kept
    out of the link; a URL followed by a comma, semicolon or closing
    parenthesis keeps that punctuation instead of gaining a period.
    """

    def _replace(match: re.Match[str]) -> str:
        url = match.group(0)
        if not url.lower().startswith(("http://", "https://")):
            return url
        stripped = url.rstrip(_TRAILING_PUNCTUATION)
        tail = url[len(stripped):]
        if not tail.strip("."):
            tail = "."
        url = uri if _same_doi(stripped, uri) else stripped
        return f'<a href="{url}" target="_blank">{url}</a>{tail}'

    return _URL_RE.sub(_replace, citation)


def postprocess_citation(citation: str, work_type: str, uri: str) -> str:
    citation = repair_endash(citation)
    citation = strip_braces(citation)
    citation = annotate_work_type(citation, work_type)
    return link_urls(citation, uri)


def _same_doi(url: str, uri: str) -> bool:
    if url == uri:
        return True
    url_match = _DOI_URL_RE.match(url)
    uri_match = _DOI_URL_RE.match(uri)
    if not url_match or not uri_match:
        return False
    return url_match.group(1).lower() == uri_match.group(1).lower()
