# === FILE: text_crawler/parser/html_parser.py ===
"""HTML parsing utilities for TextCrawler.

Two small helpers sit between the crawler and BeautifulSoup:

* :func:`parse_document`: turn raw markup into a soup once per page, so the
  text and link extractors do not parse the same body twice.
* :func:`extract_text`: visible text of the page as one string.

Both extractors accept either raw markup or an already parsed soup.
Text inside ``<script>``, ``<style>``, ``<noscript>`` and ``<template>`` is
not considered visible, neither are comments and doctype declarations.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from text_crawler.crawler.models import ParseError

__all__: Sequence[str] = ("Markup", "parse_document", "extract_text")

Markup = Union[str, bytes, BeautifulSoup]

_HIDDEN_TAGS = ["script", "style", "noscript", "template"]
_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def parse_document(markup: Markup, url: str = "") -> BeautifulSoup:
    """Parse *markup* with the stdlib-backed ``html.parser`` builder.

    An existing soup is returned as is. Markup the builder rejects is
    reported as :class:`ParseError` so the crawler can drop that page only.
    """
    if isinstance(markup, BeautifulSoup):
        return markup
    try:
        return BeautifulSoup(markup, "html.parser")
    except (ParserRejectedMarkup, AssertionError) as exc:
        raise ParseError(url, f"rejected markup: {exc}") from exc


def extract_text(page_content: Markup) -> str:
    """Concatenate the visible text nodes of *page_content* in document order."""
    soup = parse_document(page_content)
    chunks: list[str] = []
    for node in soup.find_all(string=True):
        if isinstance(node, _SKIPPED_STRINGS):
            continue
        if node.find_parent(_HIDDEN_TAGS) is not None:
            continue
        chunk = node.strip()
        if chunk:
            chunks.append(chunk)
    return " ".join(chunks)
