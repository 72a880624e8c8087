"""Site configuration: source paths, container selectors and owner name."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

UA = "homepage-data/1.0"

DEFAULT_PAGE = "index.html"
DEFAULT_PUBLICATIONS = "data/publications.bib"
DEFAULT_TEACHING = "data/teaching.txt"
DEFAULT_ROLE = "Primary Instructor"

# Alternatives are regexes; they are matched in a single pass, so "Verma, D"
# inside "Verma, Deepanshu" is not wrapped twice.
DEFAULT_OWNER_PATTERNS = (
    r"Deepanshu Verma",
    r"Verma, D(?:eepanshu|\.)?",
    r"D\.? Verma",
)

PREP_SELECTOR = "#prep"
SUBMITTED_SELECTOR = "#submitted"
PUBLISHED_SELECTOR = "#published"
TEACHING_SELECTOR = "#teaching tbody"


def _env_owner_patterns() -> tuple[str, ...]:
    raw = os.getenv("HOMEPAGE_OWNER", "")
    patterns = tuple(p.strip() for p in raw.split(";") if p.strip())
    return patterns or DEFAULT_OWNER_PATTERNS


@dataclass
class SiteConfig:
    page: str = DEFAULT_PAGE
    publications: str = DEFAULT_PUBLICATIONS
    teaching: str = DEFAULT_TEACHING
    # Relative sources resolve against this (URL or directory). When unset,
    # the page's directory is used.
    base_url: str | None = field(default_factory=lambda: os.getenv("HOMEPAGE_BASE_URL") or None)
    publication_format: str | None = None
    owner_patterns: tuple[str, ...] = field(default_factory=_env_owner_patterns)
    default_role: str = DEFAULT_ROLE
    prep_selector: str = PREP_SELECTOR
    submitted_selector: str = SUBMITTED_SELECTOR
    published_selector: str = PUBLISHED_SELECTOR
    teaching_selector: str = TEACHING_SELECTOR
    user_agent: str = UA

    @property
    def source_base(self) -> str:
        if self.base_url:
            return self.base_url
        return os.path.dirname(os.path.abspath(self.page))

    @property
    def publication_selectors(self) -> tuple[str, str, str]:
        return (self.prep_selector, self.submitted_selector, self.published_selector)
