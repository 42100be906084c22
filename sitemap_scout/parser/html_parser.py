# === FILE: sitemap_scout/parser/html_parser.py ===
"""HTML metadata extraction for SitemapScout.

Only three fields are of interest for a crawled page:

* title — text of the first ``<title>``, stripped.
* description — ``content`` of the first ``<meta name="description">``.
* canonical — ``href`` of the first ``<link rel="canonical">``.

Metadata is best-effort enrichment: markup the parser rejects yields an
empty :class:`~sitemap_scout.crawler.models.PageMetadata` instead of an
exception, so a broken page never aborts the crawl.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from sitemap_scout.crawler.models import PageMetadata
from sitemap_scout.errors import HTMLParseError
from sitemap_scout.logger import logger

__all__: Sequence[str] = ("extract_metadata",)


def _parse(html: Union[bytes, str]) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except (ParserRejectedMarkup, AssertionError, ValueError) as exc:
        raise HTMLParseError(str(exc)) from exc


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    # bs4 returns a list for multi-valued attributes (rel, class)
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _is_canonical(tag: Tag) -> bool:
    return "canonical" in _attr(tag, "rel").lower().split()


def extract_metadata(html: Union[bytes, str]) -> PageMetadata:
    """Walk the document once, depth-first, and pick the first match of each field."""
    try:
        soup = _parse(html)
    except HTMLParseError as exc:
        logger.warning("HTML PARSE ERROR: %s", exc)
        return PageMetadata()

    title: Optional[str] = None
    description: Optional[str] = None
    canonical: Optional[str] = None

    for node in soup.descendants:
        if not isinstance(node, Tag):
            continue
        if node.name == "title" and title is None:
            title = node.get_text().strip()
        elif node.name == "meta" and description is None:
            if _attr(node, "name").lower() == "description":
                description = _attr(node, "content")
        elif node.name == "link" and canonical is None:
            if _is_canonical(node):
                canonical = _attr(node, "href")
        if title is not None and description is not None and canonical is not None:
            break

    return PageMetadata(
        title=title or "",
        description=description or "",
        canonical=canonical or "",
    )
