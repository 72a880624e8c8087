"""Replace the inner HTML of fixed page containers.

Selectors are deliberately small: ``#id`` or ``#id tag`` (first ``tag``
descendant of the element with that id).
"""

from __future__ import annotations

import re

from homepage_data.errors import ContainerNotFoundError


def _parse_selector(selector: str) -> tuple[str, str | None]:
    parts = selector.split()
    if not parts or not parts[0].startswith("#") or len(parts) > 2:
        raise ValueError(f"Unsupported selector: {selector!r}")
    return parts[0][1:], (parts[1].lower() if len(parts) == 2 else None)


def _inner_end(doc: str, tag: str, start: int, stop: int) -> int | None:
    # Position of the closing tag that balances an element opened just before start.
    depth = 1
    tag_re = re.compile(rf"<(/?){re.escape(tag)}\b[^>]*?(/?)>", flags=re.I)
    for m in tag_re.finditer(doc, start, stop):
        if m.group(1):
            depth -= 1
            if depth == 0:
                return m.start()
        elif not m.group(2):
            depth += 1
    return None


def find_inner(doc: str, selector: str) -> tuple[int, int]:
    """Return the (start, end) span of the selected element's inner HTML."""
    elem_id, child = _parse_selector(selector)

    open_re = re.compile(
        rf"<([a-zA-Z][\w-]*)\b[^>]*?(?<![\w-])id\s*=\s*([\"']){re.escape(elem_id)}\2[^>]*>",
        flags=re.S,
    )
    m = open_re.search(doc)
    if not m:
        raise ContainerNotFoundError(selector)
    start = m.end()
    end = _inner_end(doc, m.group(1), start, len(doc))
    if end is None:
        raise ContainerNotFoundError(selector)

    if child is None:
        return start, end

    cm = re.compile(rf"<{re.escape(child)}\b[^>]*>", flags=re.I).search(doc, start, end)
    if not cm:
        raise ContainerNotFoundError(selector)
    child_end = _inner_end(doc, child, cm.end(), end)
    if child_end is None:
        raise ContainerNotFoundError(selector)
    return cm.end(), child_end


def replace_inner(doc: str, selector: str, markup: str) -> str:
    start, end = find_inner(doc, selector)
    return doc[:start] + markup + doc[end:]


def replace_all(doc: str, fragments: dict[str, str]) -> str:
    for selector, markup in fragments.items():
        doc = replace_inner(doc, selector, markup)
    return doc
