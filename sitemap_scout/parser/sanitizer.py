# File: sitemap_scout/parser/sanitizer.py
"""sitemap_scout.parser.sanitizer: Исправление неэкранированных `&` в XML перед разбором."""

from __future__ import annotations

_AMP = b"&"
_ESCAPED = b"&amp;"
_DOUBLE_ESCAPED = b"&amp;amp;"


def sanitize(data: bytes) -> bytes:
    """Экранирует каждый `&` и схлопывает получившееся `&amp;amp;` обратно в `&amp;`.

    Преобразование идемпотентно: sanitize(sanitize(x)) == sanitize(x).
    Корректность XML после него не гарантируется.
    """
    return data.replace(_AMP, _ESCAPED).replace(_DOUBLE_ESCAPED, _ESCAPED)


__all__ = ["sanitize"]
