# text_crawler/crawler/fetcher.py
"""
Fetcher module: HTTP GET with retry/backoff on transient statuses and a
per-request timeout taken from the session.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Sequence

from aiohttp import ClientError, ClientSession, InvalidURL

from text_crawler.crawler.models import FetchError, PageData, is_text_content_type
from text_crawler.logger import LOGGER_NAME

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


class Fetcher:
    """Fetches one URL at a time; every failure is reported as FetchError."""

    def __init__(
        self,
        session: ClientSession,
        retry_times: int = 2,
        retry_backoff: float = 0.5,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.session = session
        self.retry_times = retry_times
        self.retry_backoff = retry_backoff
        self._retry_status = retry_status
        self.logger = logging.getLogger(LOGGER_NAME)

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and return its decoded body. Non-text responses come back
        with an empty body: the check runs on the headers, before any read.

        5xx and 429 are retried up to ``retry_times`` with exponential backoff.
        Any other non-2xx status, a client error or a timeout raises FetchError.
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(url, raise_for_status=False) as resp:
                    status = resp.status
                    if 200 <= status < 300:
                        ctype = resp.headers.get("Content-Type", "")
                        if not is_text_content_type(ctype):
                            # body of a binary response is never downloaded
                            return PageData(url=url, content="", status=status, content_type=ctype)
                        text = await resp.text(errors="replace")
                        return PageData(url=url, content=text, status=status, content_type=ctype)
                    if status not in self._retry_status:
                        raise FetchError(url, f"HTTP {status}", status)
                    reason = f"HTTP {status}"
            except InvalidURL as exc:
                raise FetchError(url, f"invalid URL: {exc}") from exc
            except asyncio.TimeoutError as exc:
                # no retry on timeout
                raise FetchError(url, "timed out") from exc
            except ClientError as exc:
                status = None
                reason = f"{type(exc).__name__}: {exc}"

            attempts += 1
            if attempts > self.retry_times:
                raise FetchError(url, reason, status)
            backoff = min(30.0, self.retry_backoff * 2 ** (attempts - 1) + random.random() * self.retry_backoff)
            self.logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.retry_times, url, backoff)
            await asyncio.sleep(backoff)
