"""Parse the teaching source into a list of courses, most recent term first."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from homepage_data.blocks import read_labels, split_blocks

logger = logging.getLogger(__name__)

SEMESTER_ORDER = {"spring": 1, "summer": 2, "fall": 3, "winter": 4}

TEACHING_LABELS = {
    "term": "term",
    "course": "name",
    "role": "role",
    "institution": "institution",
}


@dataclass(frozen=True)
class Course:
    term: str
    name: str
    role: str = ""
    institution: str = ""


def term_key(term: str) -> tuple[int, int]:
    """Sort key for terms like "Fall 2023": (year, semester rank), 0 when unknown."""
    year_m = re.search(r"\b(\d{4})\b", term)
    year = int(year_m.group(1)) if year_m else 0
    words = term.split()
    semester = SEMESTER_ORDER.get(words[0].lower(), 0) if words else 0
    return year, semester


def parse_teaching(text: str) -> list[Course]:
    courses: list[Course] = []

    for block in split_blocks(text):
        values = read_labels(block, TEACHING_LABELS)
        if not values.get("term") or not values.get("name"):
            logger.debug("Dropping teaching block without term or course: %r", block[:60])
            continue
        courses.append(Course(**values))

    courses.sort(key=lambda c: term_key(c.term), reverse=True)
    return courses
