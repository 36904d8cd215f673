# text_crawler/crawler/models.py
"""
Data models and error types for the TextCrawler crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

_TEXT_MIME_TYPES = ("application/xhtml+xml", "application/xml")


def is_text_content_type(content_type: str) -> bool:
    """True for text/*, XHTML and XML; a missing Content-Type counts as text."""
    mime = content_type.split(";", 1)[0].strip().lower()
    return not mime or mime.startswith("text/") or mime in _TEXT_MIME_TYPES


@dataclass(slots=True)
class PageData:
    """Holds the requested URL and decoded body of a fetched page."""

    url: str
    content: str
    status: int = 200
    content_type: str = ""

    @property
    def is_text(self) -> bool:
        """True when the body is worth parsing (no type given counts as text)."""
        return is_text_content_type(self.content_type)


class UrlState(str, Enum):
    """Per-URL lifecycle; a URL missing from the state map is unvisited."""

    VISITING = "visiting"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class CrawlResult:
    """End-of-run summary. Not persisted except through reports."""

    seed_url: str
    visited: List[str] = field(default_factory=list)
    done: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    bytes_cached: int = 0
    files: List[Path] = field(default_factory=list)
    duration: float = 0.0
    stopped: bool = False

    @property
    def pages_fetched(self) -> int:
        return len(self.visited)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed_url": self.seed_url,
            "pages_fetched": self.pages_fetched,
            "visited": self.visited,
            "done": self.done,
            "failed": self.failed,
            "bytes_cached": self.bytes_cached,
            "files": [str(p) for p in self.files],
            "duration": round(self.duration, 3),
            "stopped": self.stopped,
        }


class CrawlerError(Exception):
    """Base class for crawler errors."""


class FetchError(CrawlerError):
    """Network failure, timeout or non-success HTTP status for one URL."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class ParseError(CrawlerError):
    """Markup that the HTML parser refused to process."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}" if url else reason)
        self.url = url
        self.reason = reason


class SinkError(CrawlerError):
    """Output file could not be opened or appended. Fatal for the whole run."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
