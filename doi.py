"""DOI normalization helpers."""

from __future__ import annotations

DEFAULT_DOI_URL = "https://doi.org"


def doi_to_uri(doi: str | None) -> str | None:
    """Convert 'doi:10.1234/abcdefg' to 'https://doi.org/10.1234/abcdefg'.

    Values that already start with http(s) are returned as-is. No syntax
    validation is done; a malformed DOI fails later at the resolver.
    """
    if doi is None or not doi.strip():
        return None

    doi = doi.strip()
    if doi.startswith(("http://", "https://")):
        return doi
    return f"{DEFAULT_DOI_URL}/{doi.replace('doi:', '')}"
