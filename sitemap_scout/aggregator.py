# File: sitemap_scout/aggregator.py
"""sitemap_scout.aggregator: Сводный отчёт одного запуска обхода sitemap."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sitemap_scout.crawler.models import CrawlResult


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода: найденные URL, результаты воркеров и фатальная ошибка корня."""

    sitemap_url: str
    discovered: List[str] = field(default_factory=list)
    results: List[CrawlResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> List[CrawlResult]:
        return [r for r in self.results if not r.ok]

    @property
    def html_pages(self) -> List[CrawlResult]:
        return [r for r in self.results if r.metadata is not None]

    def summary(self) -> Dict[str, Any]:
        """Краткая статистика для CLI и логов."""
        return {
            "sitemap_url": self.sitemap_url,
            "discovered": len(self.discovered),
            "crawled": len(self.results),
            "html": len(self.html_pages),
            "failed": len(self.failed),
            "error": self.error,
        }

    def as_dict(self) -> Dict[str, Any]:
        data = self.summary()
        data["results"] = [r.as_dict() for r in self.results]
        return data

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(
    sitemap_url: str,
    discovered: Sequence[str],
    results: Sequence[CrawlResult],
) -> CrawlReport:
    """Собирает результаты в CrawlReport, упорядочивая их по URL для стабильного вывода."""
    return CrawlReport(
        sitemap_url=sitemap_url,
        discovered=list(discovered),
        results=sorted(results, key=lambda r: r.url),
    )


__all__ = ["CrawlReport", "aggregate_results"]
