"""Heuristic work-type inference for parsed BibTeX records (no network calls)."""

from __future__ import annotations

from models import BibRecord


def determine_work_type(record: BibRecord | None) -> str:
    """Return a best-effort work type for the first entry of ``record``.

    - "article":  the entry names a journal.
    - "software": the entry has a software field or is a biblatex @software.
    - "":         anything else, which suppresses the citation annotation.
    """
    if record is None or record.first is None:
        return ""

    entry = record.first
    if entry.has_field("journal"):
        return "article"
    if entry.has_field("software") or entry.entry_type == "software":
        return "software"
    return ""


def humanize_work_type(work_type: str) -> str:
    """Format a work type for display: 'data_paper' -> 'Data paper'."""
    text = work_type.strip().replace("_", " ")
    return text[:1].upper() + text[1:].lower()
