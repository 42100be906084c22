# File: sitemap_scout/parser/__init__.py
"""sitemap_scout.parser: Разбор sitemap XML и HTML-метаданных."""

from .html_parser import extract_metadata
from .sanitizer import sanitize
from .sitemap_parser import parse_sitemap

__all__ = ["extract_metadata", "parse_sitemap", "sanitize"]
