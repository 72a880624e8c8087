#!/usr/bin/env python3
"""Update the homepage's publication tabs and teaching table.

- Publications: BibTeX (``.bib``) or ``Label: value`` text, split into
  in preparation / submitted / published and written into ``#prep``,
  ``#submitted`` and ``#published``.
- Teaching: ``Term:/Course:/Role:/Institution:`` blocks written as table rows
  into ``#teaching tbody``.

Both sources are fetched independently. If one fails, only its region gets
an error message; the other is still updated.
"""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor

from homepage_data.config import SiteConfig
from homepage_data.errors import ContainerNotFoundError
from homepage_data.fetch import fetch_text
from homepage_data.logging_config import setup_logging
from homepage_data.page import replace_all
from homepage_data.publications import BIBTEX, TEXT, detect_format, parse_publications
from homepage_data.render import (
    PUBLICATIONS_ERROR,
    TEACHING_ERROR,
    owner_regex,
    render_category,
    render_teaching,
)
from homepage_data.teaching import parse_teaching

logger = logging.getLogger(__name__)


def load_publications(config: SiteConfig) -> dict[str, str]:
    try:
        text = fetch_text(config.publications, config.source_base, user_agent=config.user_agent)
        fmt = config.publication_format or detect_format(config.publications)
        pubs = parse_publications(text, fmt)
        owner = owner_regex(config.owner_patterns)

        fragments = {}
        for selector, (category, items) in zip(config.publication_selectors, pubs.items()):
            fragments[selector] = render_category(category, items, owner)
            logger.info("Publications %s: %d", category, len(items))
        return fragments
    except Exception:
        logger.exception("Error loading publications from %s", config.publications)
        return {selector: PUBLICATIONS_ERROR for selector in config.publication_selectors}


def load_teaching(config: SiteConfig) -> dict[str, str]:
    try:
        text = fetch_text(config.teaching, config.source_base, user_agent=config.user_agent)
        courses = parse_teaching(text)
        logger.info("Courses: %d", len(courses))
        return {config.teaching_selector: render_teaching(courses, config.default_role)}
    except Exception:
        logger.exception("Error loading teaching data from %s", config.teaching)
        return {config.teaching_selector: TEACHING_ERROR}


def build_fragments(config: SiteConfig) -> dict[str, str]:
    with ThreadPoolExecutor(max_workers=2) as pool:
        pubs_future = pool.submit(load_publications, config)
        teaching_future = pool.submit(load_teaching, config)
        fragments = dict(pubs_future.result())
        fragments.update(teaching_future.result())
    return fragments


def update_page(config: SiteConfig) -> str:
    with open(config.page, "r", encoding="utf-8") as f:
        doc = f.read()
    return replace_all(doc, build_fragments(config))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = SiteConfig()
    ap = argparse.ArgumentParser(
        description="Fill the publication and teaching sections of a homepage from text sources.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--page", default=defaults.page, help="HTML page to update")
    ap.add_argument("--publications", default=defaults.publications, help="publication source (relative path)")
    ap.add_argument("--teaching", default=defaults.teaching, help="teaching source (relative path)")
    ap.add_argument(
        "--base-url",
        default=defaults.base_url,
        help="URL or directory the sources are relative to (default: the page's directory)",
    )
    ap.add_argument(
        "--format",
        choices=(BIBTEX, TEXT),
        default=None,
        help="publication source format (default: from extension, then content)",
    )
    ap.add_argument(
        "--owner",
        action="append",
        default=None,
        help="regex for the site owner's name, bolded in author lists (repeatable)",
    )
    ap.add_argument("--output", default=None, help="write here instead of updating the page in place")
    ap.add_argument("--dry-run", action="store_true", help="print the result instead of writing it")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> SiteConfig:
    config = SiteConfig(
        page=args.page,
        publications=args.publications,
        teaching=args.teaching,
        base_url=args.base_url,
        publication_format=args.format,
    )
    if args.owner:
        config.owner_patterns = tuple(args.owner)
    return config


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    config = config_from_args(args)

    try:
        new_doc = update_page(config)
    except ContainerNotFoundError as e:
        raise SystemExit(str(e))

    if args.dry_run:
        sys.stdout.write(new_doc)
        return

    out = args.output or config.page
    with open(out, "w", encoding="utf-8") as f:
        f.write(new_doc)
    logger.info("Wrote %s", out)


if __name__ == "__main__":
    main()
