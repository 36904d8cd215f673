"""text_crawler.output: буфер текста и запись в выходные файлы."""

from .cache_buffer import DEFAULT_MAX_BYTES, CacheBuffer
from .file_sink import FileSink, sanitize_host

__all__ = ["CacheBuffer", "DEFAULT_MAX_BYTES", "FileSink", "sanitize_host"]
