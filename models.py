"""Shared typed models for the citation pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RawRecord:
    """Final (non-redirect) response returned by the DOI resolver."""

    status_code: int
    body: str
    url: str
    redirects: int = 0


@dataclass(frozen=True, slots=True)
class BibEntry:
    """One parsed BibTeX entry with safe field lookup."""

    key: str
    entry_type: str
    fields: Mapping[str, str] = field(default_factory=dict)

    def has_field(self, name: str) -> bool:
        return bool(self.get_field(name).strip())

    def get_field(self, name: str, default: str = "") -> str:
        value = self.fields.get(name.lower())
        return value if isinstance(value, str) else default


@dataclass(frozen=True, slots=True)
class BibRecord:
    """Structured record parsed from a BibTeX payload."""

    entries: tuple[BibEntry, ...] = ()

    @property
    def first(self) -> BibEntry | None:
        return self.entries[0] if self.entries else None

    @property
    def is_empty(self) -> bool:
        return not self.entries
