# text_crawler/crawler/link_extractor.py
"""
Link extraction for TextCrawler.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlsplit

from bs4.element import Tag

from text_crawler.parser.html_parser import Markup, parse_document

_SKIPPED_PREFIXES = ("#", "mailto:")
_HTTP_SCHEMES = ("http", "https")


def extract_links(page_content: Markup, origin_url: str) -> List[str]:
    """
    Extract absolute HTTP(S) links from the anchors of *page_content*.

    Skips empty, fragment-only and mailto: hrefs. Absolute hrefs are kept
    unchanged, relative ones are resolved against *origin_url*.
    Duplicates are kept in document order; dedup belongs to the crawler.
    """
    soup = parse_document(page_content, origin_url)
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIPPED_PREFIXES):
            continue
        try:
            absolute = raw if urlsplit(raw).scheme else urljoin(origin_url, raw)
            parsed = urlsplit(absolute)
        except ValueError:
            # malformed netloc, e.g. an unclosed IPv6 bracket
            continue
        if parsed.scheme.lower() in _HTTP_SCHEMES and parsed.netloc:
            links.append(absolute)
    return links
