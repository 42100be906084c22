# sitemap_scout/crawler/transport.py
"""
Transport module: one shared HTTP session, rotating User-Agent, gzip by URL suffix.
"""
from __future__ import annotations

import asyncio
import gzip
import random
import zlib
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.models import FetchResponse
from sitemap_scout.errors import FetchError, FetchErrorKind
from sitemap_scout.logger import logger
from sitemap_scout.utils import is_gzip_url

GZIP_MAGIC = b"\x1f\x8b"


class Transport:
    """Fetches resources through a single connection-reusing ClientSession.

    Use as an async context manager; the session lives for the whole run and
    is shared read-only by the resolver and every worker.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        session: Optional[ClientSession] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._rng = rng or random.Random()

    async def __aenter__(self) -> Transport:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def user_agent(self) -> str:
        return self._rng.choice(self.config.user_agents)

    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent(), "Accept": self.config.accept}

    async def fetch(self, url: str) -> FetchResponse:
        """
        GET the URL and return its decoded body.

        Any HTTP status is returned as-is; only transport failures and gzip
        decoding failures raise :class:`FetchError`.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        logger.info("REQUEST: %s", url)
        try:
            async with self.session.get(url, headers=self.headers()) as resp:
                status = resp.status
                content_type = resp.headers.get("Content-Type", "")
                encoding = resp.headers.get("Content-Encoding", "").lower()
                logger.info("RESPONSE: %s STATUS: %d CT: %s", url, status, content_type)
                body = await resp.read()
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.warning("HTTP ERROR: %s %r", url, exc)
            raise FetchError(url, FetchErrorKind.NETWORK, exc) from exc

        # aiohttp already inflated a Content-Encoding: gzip body
        inflated = encoding == "gzip" and not body.startswith(GZIP_MAGIC)
        if is_gzip_url(url) and not inflated:
            logger.info("GZIP DETECTED: %s", url)
            try:
                body = gzip.decompress(body)
            except (OSError, EOFError, zlib.error) as exc:
                logger.warning("GZIP ERROR: %s %s", url, exc)
                raise FetchError(url, FetchErrorKind.DECODE, exc) from exc

        return FetchResponse(url=url, body=body, content_type=content_type, status=status)


__all__ = ["Transport"]
