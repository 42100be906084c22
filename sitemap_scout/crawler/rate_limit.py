# sitemap_scout/crawler/rate_limit.py
"""
Politeness delays: pauses between outbound requests.

The resolver and the scheduler receive a :class:`DelayPolicy` instead of
calling ``asyncio.sleep`` directly, so the strategy (fixed, jittered,
minimum interval) can be swapped without touching crawl logic.
"""
from __future__ import annotations

import asyncio
import random
import time
from typing import Optional


class DelayPolicy:
    """Base policy: awaited before (resolver) or after (scheduler) a request."""

    async def wait(self) -> None:
        raise NotImplementedError


class NoDelay(DelayPolicy):
    async def wait(self) -> None:
        return None


class FixedDelay(DelayPolicy):
    """Sleeps the same interval on every call."""

    def __init__(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("delay must be >= 0")
        self.seconds = seconds

    def interval(self) -> float:
        return self.seconds

    async def wait(self) -> None:
        interval = self.interval()
        if interval > 0:
            await asyncio.sleep(interval)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} seconds={self.seconds}>"


class JitteredDelay(FixedDelay):
    """Fixed interval plus uniform random jitter in ``[0, jitter]``."""

    def __init__(self, seconds: float, jitter: float, rng: Optional[random.Random] = None) -> None:
        super().__init__(seconds)
        if jitter < 0:
            raise ValueError("jitter must be >= 0")
        self.jitter = jitter
        self._rng = rng or random.Random()

    def interval(self) -> float:
        return self.seconds + self._rng.uniform(0, self.jitter)


class MinIntervalDelay(DelayPolicy):
    """Guarantees at least ``seconds`` between consecutive calls, shared by all callers."""

    def __init__(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("delay must be >= 0")
        self.seconds = seconds
        self._lock = asyncio.Lock()
        self._last_ts: Optional[float] = None

    async def wait(self) -> None:
        async with self._lock:
            now = time.monotonic()
            if self._last_ts is not None:
                remaining = self.seconds - (now - self._last_ts)
                if remaining > 0:
                    await asyncio.sleep(remaining)
            self._last_ts = time.monotonic()


def build_delay(seconds: float, jitter: float = 0.0, mode: str = "fixed") -> DelayPolicy:
    """Pick the policy matching configured values.

    ``mode="min_interval"`` returns one :class:`MinIntervalDelay`, so every
    caller holding it shares the same clock; jitter is ignored in that mode.
    """
    if mode == "min_interval":
        return MinIntervalDelay(seconds)
    if mode != "fixed":
        raise ValueError(f"unknown delay mode: {mode}")
    if jitter > 0:
        return JitteredDelay(seconds, jitter)
    if seconds > 0:
        return FixedDelay(seconds)
    return NoDelay()


__all__ = [
    "DelayPolicy",
    "NoDelay",
    "FixedDelay",
    "JitteredDelay",
    "MinIntervalDelay",
    "build_delay",
]
