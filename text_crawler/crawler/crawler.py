# === FILE: text_crawler/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Dict, Optional, Set, Tuple
from urllib.parse import urlsplit

from aiohttp import ClientSession, ClientTimeout

from text_crawler.config import CrawlerConfig
from text_crawler.crawler.fetcher import Fetcher
from text_crawler.crawler.link_extractor import extract_links
from text_crawler.crawler.models import CrawlResult, FetchError, ParseError, SinkError, UrlState
from text_crawler.logger import LOGGER_NAME
from text_crawler.output.cache_buffer import CacheBuffer
from text_crawler.parser.html_parser import extract_text, parse_document
from text_crawler.utils import is_crawlable_url, normalize_url

__all__ = ("AsyncCrawler",)

_QueueItem = Tuple[str, int]


class AsyncCrawler:
    """Асинхронный краулер: пул воркеров над очередью, текст страниц копится в CacheBuffer."""

    def __init__(self, config: CrawlerConfig, buffer: CacheBuffer) -> None:
        self.config = config
        self.buffer = buffer
        self.seed = normalize_url(str(config.seed_url))
        self.seed_host = urlsplit(self.seed).netloc
        self.states: Dict[str, UrlState] = {}
        # every URL ever put on the queue; states only gains a URL once a worker claims it
        self._queued: Set[str] = set()
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = logging.getLogger(LOGGER_NAME)
        self._stop = asyncio.Event()

    async def __aenter__(self) -> AsyncCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(
            self.session,
            retry_times=self.config.retry_times,
            retry_backoff=self.config.retry_backoff,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def visited(self) -> Set[str]:
        return set(self.states)

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Stop dispatching new fetches; in-flight pages finish, the buffer is still flushed."""
        if not self._stop.is_set():
            self.logger.info("Stop requested, draining queue")
        self._stop.set()

    async def crawl(self) -> CrawlResult:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        self.logger.info("Старт обхода: %s", self.seed)
        start = time.monotonic()
        queue: asyncio.Queue[_QueueItem] = asyncio.Queue()
        self._enqueue(queue, self.seed, 0)

        loop = asyncio.get_running_loop()
        timer = loop.call_later(self.config.crawl_timeout, self.stop) if self.config.crawl_timeout else None
        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        joiner = asyncio.create_task(queue.join())
        try:
            done, _ = await asyncio.wait([joiner, *workers], return_when=asyncio.FIRST_COMPLETED)
        finally:
            if timer is not None:
                timer.cancel()
            for task in (joiner, *workers):
                task.cancel()
            await asyncio.gather(joiner, *workers, return_exceptions=True)

        # workers only ever finish by raising; that is a fatal sink error
        for task in done:
            if task is not joiner and not task.cancelled() and task.exception() is not None:
                raise task.exception()  # type: ignore[misc]

        await self.buffer.flush_if_non_empty()
        result = self._result(time.monotonic() - start)
        self.logger.info(
            "Завершено: %d страниц (%d с ошибкой) за %.2f с, %d байт текста",
            result.pages_fetched, len(result.failed), result.duration, result.bytes_cached,
        )
        return result

    async def _worker(self, queue: asyncio.Queue[_QueueItem]) -> None:
        while True:
            url, depth = await queue.get()
            try:
                if self._stop.is_set() or not self._claim(url):
                    continue
                await self._visit(url, depth, queue)
            except SinkError:
                raise
            except Exception:
                self.states[url] = UrlState.FAILED
                self.logger.exception("Unexpected error while processing %s", url)
            finally:
                queue.task_done()

    def _enqueue(self, queue: asyncio.Queue[_QueueItem], url: str, depth: int) -> None:
        self._queued.add(url)
        queue.put_nowait((url, depth))

    def _claim(self, url: str) -> bool:
        """Atomic check-and-insert into the visited set (no await in between)."""
        if url in self.states:
            self.logger.debug("URL already visited: %s", url)
            return False
        if self.config.max_pages is not None and len(self.states) >= self.config.max_pages:
            return False
        self.states[url] = UrlState.VISITING
        return True

    async def _visit(self, url: str, depth: int, queue: asyncio.Queue[_QueueItem]) -> None:
        assert self.fetcher is not None
        self.logger.info("Crawling URL: %s", url)
        try:
            page = await self.fetcher.fetch(url)
            if not page.is_text:
                self.logger.debug("Skipping non-text content %s (%s)", url, page.content_type)
                self.states[url] = UrlState.DONE
                return
            soup = parse_document(page.content, url)
            text = extract_text(soup)
            links = extract_links(soup, url)
        except (FetchError, ParseError) as exc:
            self.states[url] = UrlState.FAILED
            self.logger.warning("Failed to retrieve %s: %s", url, exc)
            return

        if text:
            await self.buffer.add(text + "\n")
        self.states[url] = UrlState.DONE
        self.logger.debug("Found %d links on %s", len(links), url)

        if self.config.max_depth is not None and depth >= self.config.max_depth:
            return
        for link in links:
            if not is_crawlable_url(link):
                continue
            candidate = normalize_url(link)
            if self.config.same_host_only and urlsplit(candidate).netloc != self.seed_host:
                continue
            if candidate not in self._queued:
                self._enqueue(queue, candidate, depth + 1)

    def _result(self, duration: float) -> CrawlResult:
        return CrawlResult(
            seed_url=self.seed,
            visited=sorted(self.states),
            done=sorted(u for u, s in self.states.items() if s is UrlState.DONE),
            failed=sorted(u for u, s in self.states.items() if s is UrlState.FAILED),
            bytes_cached=self.buffer.total_bytes,
            files=list(self.buffer.sink.files),
            duration=duration,
            stopped=self._stop.is_set(),
        )
