"""Exceptions raised by the citation pipeline stages.

``fetch_citation`` catches all of these and returns ``None``; they exist so the
individual stages can be used and tested on their own.
"""

from __future__ import annotations


class CitationError(RuntimeError):
    """Base class for pipeline failures."""


class RedirectLimitExceeded(CitationError):
    """The resolver kept redirecting past the configured hop limit."""

    def __init__(self, uri: str, max_redirects: int) -> None:
        super().__init__(f"Too many redirects (>{max_redirects}) while resolving {uri}")
        self.uri = uri
        self.max_redirects = max_redirects


class BibtexParseError(CitationError):
    """The resolver payload could not be parsed as BibTeX."""


class StyleNotFound(CitationError):
    """No CSL style with the requested name is available."""
