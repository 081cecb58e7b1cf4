"""BibTeX parsing and conversion to CSL-JSON items."""

from __future__ import annotations

import logging
import re
from typing import Any

import bibtexparser
from bibtexparser.bparser import BibTexParser
from bibtexparser.customization import InvalidName, splitname

from errors import BibtexParseError
from models import BibEntry, BibRecord

LOGGER = logging.getLogger(__name__)

# BibTeX entry type -> CSL item type.
CSL_TYPES: dict[str, str] = {
    "article": "article-journal",
    "book": "book",
    "booklet": "pamphlet",
    "conference": "paper-conference",
    "inbook": "chapter",
    "incollection": "chapter",
    "inproceedings": "paper-conference",
    "manual": "book",
    "mastersthesis": "thesis",
    "misc": "document",
    "phdthesis": "thesis",
    "proceedings": "book",
    "techreport": "report",
    "unpublished": "manuscript",
    "dataset": "dataset",
    "software": "software",
    "online": "webpage",
    "thesis": "thesis",
    "report": "report",
}

# BibTeX field -> CSL variable, for plain string fields.
CSL_FIELDS: dict[str, str] = {
    "title": "title",
    "journal": "container-title",
    "booktitle": "container-title",
    "publisher": "publisher",
    "address": "publisher-place",
    "doi": "DOI",
    "url": "URL",
    "isbn": "ISBN",
    "issn": "ISSN",
    "volume": "volume",
    "number": "issue",
    "edition": "edition",
    "series": "collection-title",
    "version": "version",
}

_MONTHS = {
    name: index
    for index, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"],
        start=1,
    )
}
_YEAR_RE = re.compile(r"\d{4}")
_AUTHOR_SEP_RE = re.compile(r"\s+and\s+", re.IGNORECASE)


def parse_bibtex(text: str) -> BibRecord:
    """Parse a raw BibTeX payload into a BibRecord.

    Raises:
        BibtexParseError: The payload is not parseable BibTeX.
    """
    parser = BibTexParser(common_strings=True, ignore_nonstandard_types=False)
    try:
        database = bibtexparser.loads(text, parser=parser)
    except Exception as exc:  # pyparsing raises several unrelated types
        raise BibtexParseError(f"Could not parse BibTeX payload: {exc}") from exc

    entries = tuple(
        BibEntry(
            key=str(raw.get("ID", "")).strip(),
            entry_type=str(raw.get("ENTRYTYPE", "")).lower(),
            fields={
                name.lower(): value
                for name, value in raw.items()
                if name not in ("ID", "ENTRYTYPE") and isinstance(value, str)
            },
        )
        for raw in database.entries
    )
    LOGGER.debug("Parsed BibTeX payload: entries=%s", len(entries))
    return BibRecord(entries=entries)


def entry_to_csl_json(entry: BibEntry) -> dict[str, Any]:
    """Convert one BibEntry into a CSL-JSON item for citeproc."""
    item: dict[str, Any] = {
        "id": entry.key,
        "type": CSL_TYPES.get(entry.entry_type, "document"),
    }

    for bib_name, csl_name in CSL_FIELDS.items():
        if entry.has_field(bib_name) and csl_name not in item:
            item[csl_name] = _collapse_whitespace(entry.get_field(bib_name))

    for role in ("author", "editor"):
        if entry.has_field(role):
            item[role] = parse_names(entry.get_field(role))

    if entry.has_field("pages"):
        item["page"] = entry.get_field("pages").replace("--", "-")

    issued = _issued_date(entry)
    if issued:
        item["issued"] = {"date-parts": [issued]}

    return item


def parse_names(value: str) -> list[dict[str, str]]:
    """Split a BibTeX name list ("Doe, Jane and John Smith") into CSL names."""
    names: list[dict[str, str]] = []
    for raw_name in _AUTHOR_SEP_RE.split(_collapse_whitespace(value)):
        raw_name = raw_name.strip()
        if not raw_name:
            continue
        # Brace-protected names are institutions ("{Dryad Digital Repository}").
        if raw_name.startswith("{") and raw_name.endswith("}"):
            names.append({"literal": raw_name[1:-1]})
            continue
        try:
            parts = splitname(raw_name, strict_mode=False)
        except InvalidName:
            names.append({"literal": raw_name})
            continue

        name: dict[str, str] = {}
        family = " ".join(parts.get("last", []))
        given = " ".join(parts.get("first", []))
        particle = " ".join(parts.get("von", []))
        suffix = " ".join(parts.get("jr", []))
        if family:
            name["family"] = family
        if given:
            name["given"] = given
        if particle:
            name["non-dropping-particle"] = particle
        if suffix:
            name["suffix"] = suffix
        names.append(name or {"literal": raw_name})
    return names


def _issued_date(entry: BibEntry) -> list[int]:
    match = _YEAR_RE.search(entry.get_field("year"))
    if not match:
        return []

    parts = [int(match.group(0))]
    month = entry.get_field("month").strip().lower()
    if month.isdigit() and 1 <= int(month) <= 12:
        parts.append(int(month))
    elif month[:3] in _MONTHS:
        parts.append(_MONTHS[month[:3]])
    return parts


def _collapse_whitespace(value: str) -> str:
    return " ".join(value.split())
