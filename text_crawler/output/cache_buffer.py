# text_crawler/output/cache_buffer.py
"""
In-memory text buffer with a byte-size counter. Spills to the file sink
when the next page would push it to the threshold, and once more at the
end of the crawl.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from text_crawler.config import MIB
from text_crawler.crawler.models import SinkError
from text_crawler.logger import logger
from text_crawler.output.file_sink import FileSink

DEFAULT_MAX_BYTES = 30 * MIB


def utf8_size(text: str) -> int:
    return len(text.encode("utf-8"))


class CacheBuffer:
    """Accumulates extracted text; every mutation is serialized by one lock.

    ``size_bytes`` is recomputed from the whole content after each append,
    so it always equals the UTF-8 length of :attr:`content`.
    """

    def __init__(self, sink: FileSink, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        if max_bytes <= 0:
            raise ValueError("max_bytes must be > 0")
        self.sink = sink
        self.max_bytes = max_bytes
        self.total_bytes = 0
        self.flush_count = 0
        self._content = ""
        self._size = 0
        self._lock = asyncio.Lock()

    @property
    def content(self) -> str:
        return self._content

    @property
    def size_bytes(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    async def add(self, text: str) -> None:
        """Append *text*, flushing the current generation first if the threshold is reached."""
        if not text:
            return
        incoming = utf8_size(text)
        async with self._lock:
            if self._content and self._size + incoming >= self.max_bytes:
                logger.info("Cache reached limit (%d bytes). Writing to file...", self._size)
                await self._flush_locked()
            self._content += text
            self._size = utf8_size(self._content)
            self.total_bytes += incoming

    async def flush_if_non_empty(self) -> Optional[Path]:
        """Persist whatever is left; returns the written file or None for an empty buffer."""
        async with self._lock:
            if not self._content:
                return None
            return await self._flush_locked()

    async def _flush_locked(self) -> Path:
        try:
            path = await asyncio.to_thread(self.sink.flush, self._content)
        except SinkError:
            logger.error("Flush failed, %d bytes kept in buffer", self._size)
            raise
        self._content = ""
        self._size = 0
        self.flush_count += 1
        return path
