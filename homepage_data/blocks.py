"""Blank-line-delimited blocks of ``Label: value`` lines."""

from __future__ import annotations

import re
from typing import Iterator

_BLANK_LINE_RE = re.compile(r"\n\s*\n")
_LABEL_RE = re.compile(r"^\s*([A-Za-z]+)\s*:\s*(.*?)\s*$")


def split_blocks(text: str) -> Iterator[str]:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    for block in _BLANK_LINE_RE.split(text):
        block = block.strip()
        if block:
            yield block


def read_labels(block: str, labels: dict[str, str]) -> dict[str, str]:
    """Map the block's recognised labels (case-insensitive) to field names.

    Lines with an unknown label, or no label at all, are ignored. A repeated
    label keeps its last value.
    """
    out: dict[str, str] = {}
    for line in block.split("\n"):
        m = _LABEL_RE.match(line)
        if not m:
            continue
        name = labels.get(m.group(1).lower())
        if name:
            out[name] = m.group(2)
    return out
