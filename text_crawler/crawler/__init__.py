"""text_crawler.crawler: обход сайта, загрузка страниц и извлечение ссылок."""

from .models import CrawlerError, CrawlResult, FetchError, PageData, ParseError, SinkError, UrlState

__all__ = [
    "CrawlResult",
    "CrawlerError",
    "FetchError",
    "PageData",
    "ParseError",
    "SinkError",
    "UrlState",
]
