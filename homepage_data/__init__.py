"""Render an academic homepage's publication list and teaching history."""

from __future__ import annotations

from homepage_data.errors import ContainerNotFoundError, HomepageDataError
from homepage_data.publications import (
    CategorizedPublications,
    Publication,
    categorize,
    parse_bibtex,
    parse_key_value,
    parse_publications,
)
from homepage_data.teaching import Course, parse_teaching

__version__ = "1.0.0"

__all__ = [
    "CategorizedPublications",
    "ContainerNotFoundError",
    "Course",
    "HomepageDataError",
    "Publication",
    "categorize",
    "parse_bibtex",
    "parse_key_value",
    "parse_publications",
    "parse_teaching",
]
