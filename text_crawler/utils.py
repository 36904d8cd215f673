# File: text_crawler/utils.py
"""text_crawler.utils: Утилиты для нормализации URL и определения корневого хоста обхода."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urlsplit, urlunsplit

__all__: Sequence[str] = (
    "normalize_url",
    "is_crawlable_url",
    "root_host",
)

_HTTP_SCHEMES = ("http", "https")


def normalize_url(url: str) -> str:
    """Нормализует URL для множества посещённых: схема и хост в нижнем регистре, без фрагмента."""
    parts = urlsplit(url.strip())
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))


def is_crawlable_url(url: str) -> bool:
    """Проверяет, что URL абсолютный и использует http(s)."""
    parts = urlsplit(url)
    return parts.scheme.lower() in _HTTP_SCHEMES and bool(parts.netloc)


def root_host(url: str) -> str:
    """Возвращает хост обхода: нижний регистр, без схемы, учётных данных и префикса ``www.``."""
    netloc = urlsplit(url).netloc.rsplit("@", 1)[-1].lower()
    return netloc.removeprefix("www.")
