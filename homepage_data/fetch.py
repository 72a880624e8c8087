"""Retrieve a raw text resource by relative path, from disk or over HTTP."""

from __future__ import annotations

import logging
import os
import urllib.parse

import requests

from homepage_data.config import UA

logger = logging.getLogger(__name__)


def _session(user_agent: str = UA) -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": user_agent})
    return s


def _is_url(s: str) -> bool:
    return urllib.parse.urlparse(s).scheme in ("http", "https")


def resolve(path: str, base: str | None = None) -> str:
    if _is_url(path) or os.path.isabs(path) or not base:
        return path
    if _is_url(base):
        if not base.endswith("/"):
            base += "/"
        return urllib.parse.urljoin(base, path)
    return os.path.join(base, path)


def _get_text(s: requests.Session, url: str) -> str:
    r = s.get(url, timeout=30)
    r.raise_for_status()
    return r.text


def fetch_text(path: str, base: str | None = None, *, user_agent: str = UA) -> str:
    """Return the text behind ``path``; errors propagate, there is no retry."""
    target = resolve(path, base)
    if _is_url(target):
        logger.debug("GET %s", target)
        with _session(user_agent) as s:
            return _get_text(s, target)

    logger.debug("Reading %s", target)
    with open(target, "r", encoding="utf-8") as f:
        return f.read()
