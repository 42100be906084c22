# sitemap_scout/crawler/scheduler.py
"""
Bounded worker pool that fetches sitemap-listed pages and emits CrawlResult.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, Iterable, List, Optional, Sequence

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.models import CrawlResult
from sitemap_scout.crawler.rate_limit import DelayPolicy, NoDelay, build_delay
from sitemap_scout.crawler.transport import Transport
from sitemap_scout.errors import FetchError
from sitemap_scout.logger import logger
from sitemap_scout.parser.html_parser import extract_metadata
from sitemap_scout.utils import is_html_content_type

__all__ = ("CrawlScheduler",)


class CrawlScheduler:
    """Fixed-size pool of asyncio workers over a shared job queue.

    Every submitted URL yields exactly one :class:`CrawlResult`; a fetch that
    never got a response is reported with ``status=0`` and ``error`` set
    rather than being dropped. Result order is not guaranteed.
    """

    def __init__(
        self,
        transport: Transport,
        workers: int = 5,
        page_delay: Optional[DelayPolicy] = None,
        queue_size: int = 100,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.transport = transport
        self.workers = workers
        self.page_delay = page_delay or NoDelay()
        self.queue_size = queue_size

    @classmethod
    def from_config(cls, transport: Transport, config: CrawlerConfig) -> CrawlScheduler:
        return cls(
            transport,
            workers=config.workers,
            page_delay=build_delay(config.page_delay, config.delay_jitter, config.delay_mode),
            queue_size=config.queue_size,
        )

    async def run(self, urls: Iterable[str]) -> List[CrawlResult]:
        return [result async for result in self.stream(urls)]

    async def stream(self, urls: Iterable[str]) -> AsyncIterator[CrawlResult]:
        """Yield results as workers emit them; ends once every worker has returned."""
        jobs: asyncio.Queue[str] = asyncio.Queue()
        for url in urls:
            jobs.put_nowait(url)

        results: asyncio.Queue[Optional[CrawlResult]] = asyncio.Queue(maxsize=self.queue_size)
        logger.info("SPAWNING WORKERS: %d", self.workers)
        workers = [
            asyncio.create_task(self._worker(worker_id, jobs, results))
            for worker_id in range(self.workers)
        ]
        closer = asyncio.create_task(self._close_when_done(workers, results))

        try:
            while True:
                result = await results.get()
                if result is None:
                    break
                yield result
            # re-raise anything a worker failed with
            await closer
        finally:
            pending = [t for t in (*workers, closer) if not t.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

    @staticmethod
    async def _close_when_done(
        workers: Sequence[asyncio.Task],
        results: asyncio.Queue[Optional[CrawlResult]],
    ) -> None:
        try:
            await asyncio.gather(*workers)
        finally:
            await results.put(None)

    async def _worker(
        self,
        worker_id: int,
        jobs: asyncio.Queue[str],
        results: asyncio.Queue[Optional[CrawlResult]],
    ) -> None:
        logger.info("WORKER STARTED: %d", worker_id)
        while True:
            try:
                url = jobs.get_nowait()
            except asyncio.QueueEmpty:
                break
            logger.info("WORKER %d FETCHING: %s", worker_id, url)
            try:
                await results.put(await self._crawl_one(worker_id, url))
            finally:
                jobs.task_done()
            await self.page_delay.wait()
        logger.info("WORKER STOPPED: %d", worker_id)

    async def _crawl_one(self, worker_id: int, url: str) -> CrawlResult:
        try:
            response = await self.transport.fetch(url)
        except FetchError as exc:
            logger.warning("WORKER %d FAILED: %s (%s)", worker_id, url, exc.kind.value)
            return CrawlResult(url=url, status=0, error=exc.kind.value)

        if not is_html_content_type(response.content_type):
            return CrawlResult(url=url, status=response.status)

        return CrawlResult(
            url=url,
            status=response.status,
            metadata=extract_metadata(response.body),
        )
