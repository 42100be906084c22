# sitemap_scout/crawler/resolver.py
"""
Recursive sitemap resolution: flattens nested sitemap indexes into page URLs.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.models import URLSet
from sitemap_scout.crawler.rate_limit import DelayPolicy, NoDelay, build_delay
from sitemap_scout.crawler.transport import Transport
from sitemap_scout.errors import FetchError, SitemapCycleError, SitemapDepthError, SitemapError
from sitemap_scout.logger import logger
from sitemap_scout.parser.sanitizer import sanitize
from sitemap_scout.parser.sitemap_parser import parse_sitemap

__all__ = ("SitemapResolver",)


class SitemapResolver:
    """Resolves a sitemap URL into an ordered list of page URLs.

    Children of an index are resolved strictly one at a time, in document
    order, with the child delay awaited before each one. A failing child is
    logged and skipped; failures of the root sitemap propagate.
    """

    def __init__(
        self,
        transport: Transport,
        child_delay: Optional[DelayPolicy] = None,
        max_depth: int = 5,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.transport = transport
        self.child_delay = child_delay or NoDelay()
        self.max_depth = max_depth

    @classmethod
    def from_config(cls, transport: Transport, config: CrawlerConfig) -> SitemapResolver:
        return cls(
            transport,
            child_delay=build_delay(config.child_delay, config.delay_jitter, config.delay_mode),
            max_depth=config.max_sitemap_depth,
        )

    async def resolve(self, url: str) -> List[str]:
        """
        Raises FetchError, UnsupportedFormatError, SitemapDepthError or
        SitemapCycleError when the root sitemap itself cannot be resolved.
        """
        return await self._resolve(url, ())

    async def _resolve(self, url: str, ancestors: Tuple[str, ...]) -> List[str]:
        if url in ancestors:
            raise SitemapCycleError(url)
        if len(ancestors) > self.max_depth:
            raise SitemapDepthError(url, self.max_depth)

        response = await self.transport.fetch(url)
        document = parse_sitemap(sanitize(response.body), url)

        if isinstance(document, URLSet):
            logger.info("SITEMAP TYPE: urlset | URLs: %d | %s", len(document.locations), url)
            return list(document.locations)

        logger.info("SITEMAP TYPE: index | CHILD SITEMAPS: %d | %s", len(document.locations), url)
        lineage = ancestors + (url,)
        urls: List[str] = []
        for child in document.locations:
            logger.info("FOLLOW CHILD SITEMAP: %s", child)
            await self.child_delay.wait()
            try:
                urls.extend(await self._resolve(child, lineage))
            except FetchError as exc:
                logger.warning("CHILD FETCH FAILED: %s (%s)", child, exc.kind.value)
            except SitemapError as exc:
                logger.warning("CHILD PARSE FAILED: %s (%s)", child, exc)
        return urls
