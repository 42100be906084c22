# sitemap_scout/crawler/models.py
"""
Data models for the SitemapScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(slots=True)
class FetchResponse:
    """Decoded body of a fetched resource plus the response metadata."""

    url: str
    body: bytes
    content_type: str
    status: int


@dataclass(slots=True)
class URLSet:
    """A ``<urlset>`` sitemap: page locations in document order."""

    locations: List[str] = field(default_factory=list)


@dataclass(slots=True)
class SitemapIndex:
    """A ``<sitemapindex>``: child sitemap locations in document order."""

    locations: List[str] = field(default_factory=list)


SitemapDocument = Union[URLSet, SitemapIndex]


@dataclass(slots=True)
class PageMetadata:
    title: str = ""
    description: str = ""
    canonical: str = ""


@dataclass(slots=True)
class CrawlResult:
    """Outcome of one crawled URL.

    ``status`` is 0 when no response was received; ``error`` then holds the
    failure kind. ``metadata`` is only set for HTML responses.
    """

    url: str
    status: int = 0
    metadata: Optional[PageMetadata] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> dict:
        meta = self.metadata or PageMetadata()
        return {
            "url": self.url,
            "status": self.status,
            "title": meta.title,
            "description": meta.description,
            "canonical": meta.canonical,
            "error": self.error,
        }
