# File: sitemap_scout/errors.py
"""sitemap_scout.errors: Иерархия исключений для загрузки и разбора sitemap."""

from __future__ import annotations

from enum import Enum

__all__ = (
    "SitemapScoutError",
    "FetchErrorKind",
    "FetchError",
    "SitemapError",
    "UnsupportedFormatError",
    "SitemapDepthError",
    "SitemapCycleError",
    "HTMLParseError",
)


class SitemapScoutError(Exception):
    """Базовое исключение проекта."""


class FetchErrorKind(str, Enum):
    """Причина неудачной загрузки ресурса."""

    NETWORK = "network"
    DECODE = "decode"


class FetchError(SitemapScoutError):
    """Ресурс не удалось получить (сеть, таймаут) или распаковать (gzip)."""

    def __init__(self, url: str, kind: FetchErrorKind, reason: object = None) -> None:
        self.url = url
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind.value} error for {url}: {reason}")


class SitemapError(SitemapScoutError):
    """Ошибка разбора или обхода sitemap."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{message}: {url}")


class UnsupportedFormatError(SitemapError):
    """Документ не является ни <urlset>, ни <sitemapindex>."""

    def __init__(self, url: str = "") -> None:
        super().__init__(url, "unsupported sitemap format")


class SitemapDepthError(SitemapError):
    """Превышена максимальная глубина вложенных sitemap index."""

    def __init__(self, url: str, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(url, f"sitemap nesting deeper than {max_depth}")


class SitemapCycleError(SitemapError):
    """Дочерний sitemap ссылается на одного из своих предков."""

    def __init__(self, url: str) -> None:
        super().__init__(url, "sitemap cycle detected")


class HTMLParseError(SitemapScoutError):
    """HTML не удалось разобрать; наружу не пробрасывается."""
