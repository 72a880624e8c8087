"""Markup fragments for publication lists and the teaching table.

Values are interpolated as-is (no HTML escaping): titles and notes may carry
inline markup, and author lists get ``<strong>`` around the owner's name.
"""

from __future__ import annotations

import re
from typing import Iterable, Pattern

from homepage_data.publications import IN_PREPARATION, PUBLISHED, SUBMITTED, Publication
from homepage_data.teaching import Course

EMPTY_MESSAGES = {
    IN_PREPARATION: "No publications in preparation.",
    SUBMITTED: "No submitted publications.",
    PUBLISHED: "No published publications.",
}

PUBLICATIONS_ERROR = "<p>Error loading publications. Please check your publications file.</p>"
TEACHING_ERROR = (
    '<tr><td colspan="4">Error loading teaching data. Please check your teaching file.</td></tr>'
)


def owner_regex(patterns: Iterable[str]) -> Pattern[str] | None:
    patterns = [p for p in patterns if p]
    if not patterns:
        return None
    return re.compile("|".join(f"(?:{p})" for p in patterns))


def format_authors(author: str, owner: Pattern[str] | None = None) -> str:
    if not author:
        return ""

    authors = [a.strip() for a in author.split(" and ")]
    if owner is not None:
        authors = [owner.sub(lambda m: f"<strong>{m.group(0)}</strong>", a) for a in authors]

    if len(authors) == 1:
        return authors[0]
    return ", ".join(authors[:-1]) + " and " + authors[-1]


def format_venue(pub: Publication) -> str:
    out = ""
    if pub.journal:
        out += f"<i>{pub.journal}</i>"
        if pub.volume:
            out += f" {pub.volume}"
            if pub.number:
                out += f"({pub.number})"
        if pub.pages:
            out += f", pp. {pub.pages}"
        if pub.year:
            out += f" ({pub.year})"
    elif pub.booktitle:
        out += f"In <i>{pub.booktitle}</i>"
        if pub.year:
            out += f" ({pub.year})"
    return out


def _doi_url(doi: str) -> str:
    if doi.startswith("http"):
        return doi
    doi = re.sub(r"^doi:\s*", "", doi, flags=re.I)
    return f"https://doi.org/{doi}"


def _arxiv_url(arxiv: str) -> str:
    if arxiv.startswith("http"):
        return arxiv
    arxiv = re.sub(r"^arxiv:\s*", "", arxiv, flags=re.I)
    return f"https://arxiv.org/abs/{arxiv}"


def format_links(pub: Publication) -> list[str]:
    links: list[str] = []
    if pub.url:
        links.append(f'<a href="{pub.url}" target="_blank"><i class="fas fa-external-link-alt"></i> Link</a>')
    if pub.arxiv:
        links.append(f'<a href="{_arxiv_url(pub.arxiv)}" target="_blank"><i class="fas fa-file-pdf"></i> arXiv</a>')
    if pub.doi:
        links.append(f'<a href="{_doi_url(pub.doi)}" target="_blank"><i class="fas fa-external-link-alt"></i> DOI</a>')
    if pub.video:
        links.append(f'<a href="{pub.video}" target="_blank"><i class="fas fa-video"></i> Video</a>')
    return links


def _meta(category: str, pub: Publication) -> str:
    if category == IN_PREPARATION:
        return pub.note
    if category == SUBMITTED:
        return f"Submitted to <i>{pub.journal}</i>" if pub.journal else ""
    return format_venue(pub)


def render_publication(category: str, pub: Publication, owner: Pattern[str] | None = None) -> str:
    parts: list[str] = []
    parts.append('  <li class="publication-item">')
    parts.append(f'    <div class="publication-title">{pub.title}</div>')
    parts.append(f'    <div class="authors">{format_authors(pub.author, owner)}</div>')

    meta = _meta(category, pub)
    if meta:
        parts.append(f'    <div class="publication-meta">{meta}</div>')

    if category != IN_PREPARATION:
        links = format_links(pub)
        if links:
            parts.append('    <div class="publication-links">')
            parts.extend(f"      {link}" for link in links)
            parts.append('    </div>')

    parts.append('  </li>')
    return "\n".join(parts)


def render_category(category: str, pubs: list[Publication], owner: Pattern[str] | None = None) -> str:
    parts: list[str] = ['<ul class="publications-list">']
    if not pubs:
        parts.append(f"  <li>{EMPTY_MESSAGES[category]}</li>")
    for p in pubs:
        parts.append(render_publication(category, p, owner))
    parts.append("</ul>")
    return "\n".join(parts)


def render_teaching(courses: list[Course], default_role: str) -> str:
    parts: list[str] = []
    for c in courses:
        parts.append("<tr>")
        parts.append(f"  <td>{c.term}</td>")
        parts.append(f"  <td>{c.name}</td>")
        parts.append(f"  <td>{c.role or default_role}</td>")
        parts.append(f"  <td>{c.institution}</td>")
        parts.append("</tr>")
    return "\n".join(parts)
