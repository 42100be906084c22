# File: sitemap_scout/parser/sitemap_parser.py
"""sitemap_scout.parser.sitemap_parser: Модуль для определения типа sitemap и извлечения <loc>."""

from __future__ import annotations

from typing import List, Optional

from lxml import etree

from sitemap_scout.crawler.models import SitemapDocument, SitemapIndex, URLSet
from sitemap_scout.errors import UnsupportedFormatError

__all__ = ["parse_sitemap"]


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(
        ns_clean=True,
        recover=True,
        resolve_entities=False,
        no_network=True,
    )


def _parse_root(data: bytes) -> Optional[etree._Element]:
    try:
        return etree.fromstring(data, parser=_xml_parser())
    except etree.XMLSyntaxError:
        return None


def _localname(element: etree._Element) -> Optional[str]:
    # комментарии и processing instructions имеют не-строковый tag
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _entry_locations(root: etree._Element, entry_tag: str) -> List[str]:
    """Собирает текст первого <loc> у каждого прямого потомка корня с именем entry_tag."""
    locations: List[str] = []
    for entry in root:
        if _localname(entry) != entry_tag:
            continue
        for child in entry:
            if _localname(child) == "loc":
                if child.text and child.text.strip():
                    locations.append(child.text.strip())
                break
    return locations


def parse_sitemap(data: bytes, url: str = "") -> SitemapDocument:
    """Разбирает XML sitemap и определяет его форму.

    Сначала проверяется <urlset> (при неоднозначности он выигрывает),
    затем <sitemapindex>. Пространства имён игнорируются, сравнивается
    только локальное имя тегов.

    Args:
        data: байты документа (уже прошедшие sanitize).
        url: адрес документа, используется в тексте ошибки.

    Returns:
        URLSet или SitemapIndex с адресами в порядке документа.

    Raises:
        UnsupportedFormatError: ни одна форма не дала ни одного <loc>.

    Пример:
    ```python
    from sitemap_scout.parser.sitemap_parser import parse_sitemap

    doc = parse_sitemap(b"<urlset><url><loc>https://a/</loc></url></urlset>")
    print(doc.locations)
    ```
    """
    root = _parse_root(data)
    if root is None:
        raise UnsupportedFormatError(url)

    page_locations = _entry_locations(root, "url")
    if page_locations:
        return URLSet(page_locations)

    child_locations = _entry_locations(root, "sitemap")
    if child_locations:
        return SitemapIndex(child_locations)

    raise UnsupportedFormatError(url)
