# File: sitemap_scout/utils.py
"""sitemap_scout.utils: Утилитарные функции для проверки URL и типов содержимого."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urlparse

__all__: Sequence[str] = (
    "is_gzip_url",
    "is_html_content_type",
    "mime_type",
)

_HTML_MIME_TYPES = ("text/html", "application/xhtml+xml")


def is_gzip_url(url: str) -> bool:
    """Возвращает True, если путь URL оканчивается на `.gz` (query и фрагмент не учитываются)."""
    return urlparse(url).path.lower().endswith(".gz")


def mime_type(content_type: str) -> str:
    """Выделяет MIME-тип из заголовка Content-Type без параметров."""
    return content_type.split(";", 1)[0].strip().lower()


def is_html_content_type(content_type: str) -> bool:
    """Проверяет, что Content-Type указывает на HTML-документ."""
    return mime_type(content_type) in _HTML_MIME_TYPES
