# File: sitemap_scout/engine.py
"""sitemap_scout.engine: Orchestration layer: resolve → fan out → collect → report."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from sitemap_scout.aggregator import CrawlReport, aggregate_results
from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.models import CrawlResult
from sitemap_scout.crawler.resolver import SitemapResolver
from sitemap_scout.crawler.scheduler import CrawlScheduler
from sitemap_scout.crawler.transport import Transport
from sitemap_scout.errors import SitemapScoutError
from sitemap_scout.logger import logger

__all__ = ["Engine", "start_crawl"]


def _log_result(result: CrawlResult) -> None:
    if not result.ok:
        logger.warning("RESULT | URL=%s STATUS=%d ERROR=%s", result.url, result.status, result.error)
        return
    meta = result.metadata
    if meta is None:
        logger.info("RESULT | URL=%s STATUS=%d", result.url, result.status)
        return
    logger.info(
        "RESULT | URL=%s STATUS=%d TITLE=%r DESC=%r CANONICAL=%r",
        result.url,
        result.status,
        meta.title,
        meta.description,
        meta.canonical,
    )


async def start_crawl(sitemap_url: str, config: Optional[CrawlerConfig] = None) -> CrawlReport:
    """
    Один полный запуск: разбор sitemap и обход всех найденных страниц.

    Ошибка корневого sitemap не пробрасывается: она логируется и попадает
    в ``CrawlReport.error``, страницы при этом не обходятся.
    """
    config = config or CrawlerConfig()
    logger.info("START CRAWL: %s", sitemap_url)

    async with Transport(config) as transport:
        resolver = SitemapResolver.from_config(transport, config)
        try:
            urls = await resolver.resolve(sitemap_url)
        except SitemapScoutError as exc:
            logger.error("FATAL ERROR: %s", exc)
            return CrawlReport(sitemap_url=sitemap_url, error=str(exc))

        logger.info("TOTAL URLS DISCOVERED: %d", len(urls))

        scheduler = CrawlScheduler.from_config(transport, config)
        results: List[CrawlResult] = []
        async for result in scheduler.stream(urls):
            _log_result(result)
            results.append(result)

    logger.info("CRAWL COMPLETE: %d results", len(results))
    return aggregate_results(sitemap_url, urls, results)


class Engine:
    """Фасад для синхронного кода: хранит конфиг и запускает обход через asyncio.run."""

    def __init__(self, config: Optional[CrawlerConfig] = None) -> None:
        self.config = config or CrawlerConfig()

    def start(self, sitemap_url: str) -> CrawlReport:
        logger.info("Starting crawl…")
        try:
            return asyncio.run(start_crawl(sitemap_url, self.config))
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise
