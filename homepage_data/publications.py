"""Parse publication sources into categorized, year-sorted record lists.

Two source formats are understood:

- BibTeX-like entries (``@article{key, title = {...}, ...}``), extracted with
  best-effort regexes; at most one level of nested braces per value.
- Blank-line-delimited ``Label: value`` blocks (``Title:``, ``Authors:``,
  ``Status:`` ...).

Every record lands in exactly one category (in preparation, submitted,
published); each category is sorted by year, newest first.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, fields

from homepage_data.blocks import read_labels, split_blocks

logger = logging.getLogger(__name__)

IN_PREPARATION = "in-preparation"
SUBMITTED = "submitted"
PUBLISHED = "published"
CATEGORIES = (IN_PREPARATION, SUBMITTED, PUBLISHED)

BIBTEX = "bibtex"
TEXT = "text"

ENTRY_TYPES = {"article", "inproceedings", "book", "incollection", "misc", "unpublished"}

_PREP_MARKERS = ("preparation", "prep")
_SUBMIT_MARKERS = ("submitted", "submit")

_ENTRY_START_RE = re.compile(r"^[ \t]*@", flags=re.M)
_ENTRY_RE = re.compile(r"(\w+)\s*\{\s*([^,\s{}]*)\s*,(.*)\}", flags=re.S)
_BRACED_FIELD_RE = re.compile(r"(\w+)\s*=\s*\{([^{}]*(?:\{[^{}]*\}[^{}]*)*)\}")
_QUOTED_FIELD_RE = re.compile(r"(\w+)\s*=\s*\"([^\"]*)\"")
_BARE_FIELD_RE = re.compile(r"(\w+)\s*=\s*(\d+)\s*(?:,|$)", flags=re.M)
_BIBTEX_SNIFF_RE = re.compile(r"^\s*@\w+\s*\{", flags=re.M)

TEXT_LABELS = {
    "title": "title",
    "authors": "author",
    "author": "author",
    "journal": "journal",
    "year": "year",
    "doi": "doi",
    "arxiv": "arxiv",
    "video": "video",
    "note": "note",
    "status": "status",
    "url": "url",
    "volume": "volume",
    "number": "number",
    "pages": "pages",
    "booktitle": "booktitle",
}


@dataclass(frozen=True)
class Publication:
    title: str = ""
    author: str = ""
    journal: str = ""
    year: str = ""
    doi: str = ""
    arxiv: str = ""
    video: str = ""
    note: str = ""
    url: str = ""
    volume: str = ""
    number: str = ""
    pages: str = ""
    booktitle: str = ""
    citekey: str = ""
    entrytype: str = ""
    status: str = ""

    @classmethod
    def from_fields(cls, values: dict[str, str]) -> "Publication":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


@dataclass
class CategorizedPublications:
    in_preparation: list[Publication] = field(default_factory=list)
    submitted: list[Publication] = field(default_factory=list)
    published: list[Publication] = field(default_factory=list)

    def get(self, category: str) -> list[Publication]:
        return {
            IN_PREPARATION: self.in_preparation,
            SUBMITTED: self.submitted,
            PUBLISHED: self.published,
        }[category]

    def items(self) -> list[tuple[str, list[Publication]]]:
        return [(c, self.get(c)) for c in CATEGORIES]

    def __len__(self) -> int:
        return len(self.in_preparation) + len(self.submitted) + len(self.published)


def year_key(year: str) -> int:
    # Leading digits only ("2021a" -> 2021); anything else counts as 0.
    m = re.match(r"\s*(\d+)", year or "")
    return int(m.group(1)) if m else 0


def categorize(pub: Publication) -> str:
    note = pub.note.lower()
    if pub.entrytype == "unpublished":
        return SUBMITTED if "submit" in note else IN_PREPARATION

    text = pub.status.lower() or note
    if any(marker in text for marker in _PREP_MARKERS):
        return IN_PREPARATION
    if any(marker in text for marker in _SUBMIT_MARKERS):
        return SUBMITTED
    return PUBLISHED


def _group(pubs: list[Publication]) -> CategorizedPublications:
    out = CategorizedPublications()
    for p in pubs:
        out.get(categorize(p)).append(p)
    for _, items in out.items():
        # list.sort is stable, so ties keep source order even with reverse=True.
        items.sort(key=lambda p: year_key(p.year), reverse=True)
    return out


def _clean_value(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def _parse_bibtex_fields(fields_text: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for m in _BRACED_FIELD_RE.finditer(fields_text):
        out[m.group(1).lower()] = _clean_value(re.sub(r"[{}]", "", m.group(2)))
    for m in _QUOTED_FIELD_RE.finditer(fields_text):
        out[m.group(1).lower()] = _clean_value(m.group(2))
    for m in _BARE_FIELD_RE.finditer(fields_text):
        out.setdefault(m.group(1).lower(), m.group(2))
    return out


def parse_bibtex(text: str) -> CategorizedPublications:
    pubs: list[Publication] = []

    # Each entry starts with "@" at the beginning of a line; whatever follows
    # its last closing brace (comments, stray text) is ignored.
    for chunk in _ENTRY_START_RE.split(text)[1:]:
        m = _ENTRY_RE.match(chunk)
        if not m:
            logger.debug("Skipping unparseable entry: %r", chunk[:60])
            continue
        entry_type = m.group(1).lower()
        cite_key = m.group(2).strip()
        if entry_type not in ENTRY_TYPES:
            logger.debug("Skipping @%s{%s}: not a publication type", entry_type, cite_key)
            continue

        values = _parse_bibtex_fields(m.group(3))
        if not values:
            logger.debug("Skipping @%s{%s}: no parseable fields", entry_type, cite_key)
            continue

        values["citekey"] = cite_key
        values["entrytype"] = entry_type
        pubs.append(Publication.from_fields(values))

    return _group(pubs)


def parse_key_value(text: str) -> CategorizedPublications:
    pubs: list[Publication] = []

    for block in split_blocks(text):
        values = read_labels(block, TEXT_LABELS)
        if not values:
            logger.debug("Skipping block without recognised labels: %r", block[:60])
            continue
        values["status"] = values.get("status", "published").lower()
        pubs.append(Publication.from_fields(values))

    return _group(pubs)


def detect_format(path: str) -> str | None:
    ext = os.path.splitext(path.split("?", 1)[0])[1].lower()
    if ext == ".bib":
        return BIBTEX
    if ext == ".txt":
        return TEXT
    return None


def parse_publications(text: str, fmt: str | None = None) -> CategorizedPublications:
    if fmt is None:
        fmt = BIBTEX if _BIBTEX_SNIFF_RE.search(text) else TEXT
    if fmt == BIBTEX:
        return parse_bibtex(text)
    if fmt == TEXT:
        return parse_key_value(text)
    raise ValueError(f"Unknown publication format: {fmt!r}")
