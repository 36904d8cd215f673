# File: text_crawler/engine.py
"""text_crawler.engine: Оркестрация одного запуска обхода (sink → буфер → краулер)."""

from __future__ import annotations

from text_crawler.config import CrawlerConfig
from text_crawler.crawler.crawler import AsyncCrawler
from text_crawler.crawler.models import CrawlResult
from text_crawler.logger import logger
from text_crawler.output.cache_buffer import CacheBuffer
from text_crawler.output.file_sink import FileSink

__all__ = ["start_crawl"]


async def start_crawl(cfg: CrawlerConfig) -> CrawlResult:
    """
    Запускает обход сайта от cfg.seed_url и возвращает CrawlResult.

    Ошибка записи в выходной файл (SinkError) не перехватывается:
    буфер сохраняет содержимое, решение о завершении принимает вызывающий код.
    """
    sink = FileSink(cfg.output_dir, str(cfg.seed_url))
    buffer = CacheBuffer(sink, max_bytes=cfg.max_cache_bytes)
    logger.debug(
        "Output dir %s, cache limit %d bytes, %d workers",
        cfg.output_dir, cfg.max_cache_bytes, cfg.concurrency,
    )
    async with AsyncCrawler(cfg, buffer) as crawler:
        return await crawler.crawl()
