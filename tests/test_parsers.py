# File: tests/test_parsers.py
"""Тесты для sanitize, parse_sitemap и extract_metadata (без сети)."""
from __future__ import annotations

import pytest
from bs4.builder import ParserRejectedMarkup

import sitemap_scout.parser.html_parser as html_parser_module
from sitemap_scout.crawler.models import PageMetadata, SitemapIndex, URLSet
from sitemap_scout.errors import UnsupportedFormatError
from sitemap_scout.parser import extract_metadata, parse_sitemap, sanitize

from conftest import sitemapindex, urlset


# --------------------------------------------------------------------------- #
#                                  sanitize                                   #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "raw,expected",
    [
        (b"a&b", b"a&amp;b"),
        (b"a&amp;b", b"a&amp;b"),
        (b"&&", b"&amp;&amp;"),
        (b"no ampersand", b"no ampersand"),
        (b"", b""),
    ],
)
def test_sanitize_escapes_bare_ampersands(raw, expected):
    assert sanitize(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [b"a&b", b"a&amp;b", b"&amp;amp;", b"&lt;x&gt;", b"&&amp;&", b"<loc>?q=1&r=2</loc>"],
)
def test_sanitize_is_idempotent(raw):
    once = sanitize(raw)
    assert sanitize(once) == once


# --------------------------------------------------------------------------- #
#                                parse_sitemap                                #
# --------------------------------------------------------------------------- #


def test_parse_urlset_keeps_document_order():
    doc = parse_sitemap(urlset("https://a/3", "https://a/1", "https://a/2").encode())
    assert isinstance(doc, URLSet)
    assert doc.locations == ["https://a/3", "https://a/1", "https://a/2"]


def test_parse_sitemap_index():
    doc = parse_sitemap(sitemapindex("https://a/s1.xml", "https://a/s2.xml.gz").encode())
    assert isinstance(doc, SitemapIndex)
    assert doc.locations == ["https://a/s1.xml", "https://a/s2.xml.gz"]


def test_parse_without_namespace_and_with_whitespace():
    xml = b"<urlset><url>\n  <loc>\n   https://a/x \n</loc>\n</url></urlset>"
    assert parse_sitemap(xml).locations == ["https://a/x"]


def test_urlset_wins_when_document_matches_both_shapes():
    xml = (
        b"<root><url><loc>https://a/page</loc></url>"
        b"<sitemap><loc>https://a/child.xml</loc></sitemap></root>"
    )
    doc = parse_sitemap(xml)
    assert isinstance(doc, URLSet)
    assert doc.locations == ["https://a/page"]


def test_ampersand_in_loc_after_sanitize():
    raw = b"<urlset><url><loc>https://a/?x=1&y=2</loc></url></urlset>"
    assert parse_sitemap(sanitize(raw)).locations == ["https://a/?x=1&y=2"]


@pytest.mark.parametrize(
    "xml",
    [
        b"<rss><channel><item><link>https://a/</link></item></channel></rss>",
        b"<urlset></urlset>",
        b"<urlset><url><lastmod>2024-01-01</lastmod></url></urlset>",
        b"not xml at all",
        b"",
    ],
)
def test_unsupported_documents(xml):
    with pytest.raises(UnsupportedFormatError) as exc_info:
        parse_sitemap(xml, "https://a/sitemap.xml")
    assert exc_info.value.url == "https://a/sitemap.xml"


def test_truncated_document_is_recovered():
    xml = b"<urlset><url><loc>https://a/1</loc></url><url><loc>https://a/2</loc>"
    doc = parse_sitemap(xml)
    assert isinstance(doc, URLSet)
    assert "https://a/1" in doc.locations


# --------------------------------------------------------------------------- #
#                              extract_metadata                               #
# --------------------------------------------------------------------------- #

REFERENCE_HTML = """
<html>
  <head>
    <title>Example</title>
    <meta name="description" content="desc">
    <link rel="canonical" href="https://x/y">
  </head>
  <body><p>Hello</p></body>
</html>
"""


def test_extract_reference_metadata():
    meta = extract_metadata(REFERENCE_HTML)
    assert (meta.title, meta.description, meta.canonical) == ("Example", "desc", "https://x/y")


def test_extract_from_bytes():
    meta = extract_metadata(REFERENCE_HTML.encode("utf-8"))
    assert meta.title == "Example"


def test_missing_fields_are_empty():
    meta = extract_metadata("<html><head></head><body><h1>No meta</h1></body></html>")
    assert meta == PageMetadata("", "", "")


def test_first_match_wins_and_title_is_trimmed():
    html = """
    <html><head>
      <title>
         First
      </title>
      <title>Second</title>
      <meta name="keywords" content="k">
      <meta name="description" content="one">
      <meta name="description" content="two">
      <link rel="stylesheet" href="/s.css">
      <link rel="canonical" href="https://a/1">
      <link rel="canonical" href="https://a/2">
    </head></html>
    """
    meta = extract_metadata(html)
    assert meta.title == "First"
    assert meta.description == "one"
    assert meta.canonical == "https://a/1"


def test_non_html_bytes_do_not_raise():
    assert extract_metadata(b"%PDF-1.4 binary-ish payload") == PageMetadata()


def test_parser_failure_degrades_to_empty(monkeypatch):
    def reject(*_args, **_kwargs):
        raise ParserRejectedMarkup("boom")

    monkeypatch.setattr(html_parser_module, "BeautifulSoup", reject)
    assert extract_metadata(REFERENCE_HTML) == PageMetadata()
