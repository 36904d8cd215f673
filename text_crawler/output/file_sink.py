# text_crawler/output/file_sink.py
"""
File sink: appends flushed text to timestamped files named after the
crawl's root host, one new file per flush.
"""
from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Union

from slugify import slugify

from text_crawler.crawler.models import SinkError
from text_crawler.logger import logger
from text_crawler.utils import root_host

# letters, digits, dots, dashes and underscores survive; everything else
# (path separators, ':' before a port, spaces ...) becomes a dash
_FILENAME_DISALLOWED = r"[^-a-z0-9._]+"
_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S%fZ"
_TICK = timedelta(microseconds=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def sanitize_host(host: str) -> str:
    """Make *host* safe to embed in a filename on any common filesystem."""
    return slugify(host, lowercase=True, regex_pattern=_FILENAME_DISALLOWED) or "unknown-host"


class FileSink:
    """Append-only text sink for one crawl run."""

    def __init__(self, output_dir: Union[str, Path], root_url: str, prefix: str = "output") -> None:
        self.output_dir = Path(output_dir)
        self.root_url = root_url
        self.prefix = prefix
        self.host = sanitize_host(root_host(root_url))
        self.files: List[Path] = []
        self._lock = threading.Lock()

    def filename_for(self, when: Optional[datetime] = None) -> Path:
        """Destination path for a flush happening at *when* (now by default)."""
        moment = when or _utcnow()
        stamp = moment.astimezone(timezone.utc).strftime(_TIMESTAMP_FORMAT)
        return self.output_dir / f"{self.prefix}-{self.host}-{stamp}.txt"

    def _next_path(self) -> Path:
        """Name for the next flush; moves the stamp forward while it collides with an earlier one."""
        moment = _utcnow()
        path = self.filename_for(moment)
        while path in self.files:
            moment += _TICK
            path = self.filename_for(moment)
        return path

    def flush(self, content: str) -> Path:
        """Append *content* (UTF-8) to a freshly named file and return its path.

        Raises SinkError when the directory or file cannot be written.
        """
        with self._lock:
            path = self._next_path()
            try:
                self.output_dir.mkdir(parents=True, exist_ok=True)
                with path.open("a", encoding="utf-8") as fh:
                    fh.write(content)
            except OSError as exc:
                raise SinkError(path, exc.strerror or str(exc)) from exc
            self.files.append(path)
        logger.info("Appended text to %s", path)
        return path
