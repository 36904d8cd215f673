# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from collections import Counter
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Union

import pytest
import pytest_asyncio
from aiohttp import web

from text_crawler.config import CrawlerConfig
from text_crawler.crawler.models import SinkError
from text_crawler.logger import LOGGER_NAME

#: page spec: HTML string, or (body, content_type), or (body, content_type, status)
PageSpec = Union[str, tuple]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@pytest.fixture(autouse=True)
def reset_project_logger():
    """The CLI replaces handlers and disables propagation; undo that between tests."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


class RecordingSink:
    """Stand-in for FileSink that keeps flushed chunks in memory."""

    def __init__(self) -> None:
        self.flushed: List[str] = []
        self.files: List[Path] = []

    def flush(self, content: str) -> Path:
        self.flushed.append(content)
        path = Path(f"chunk-{len(self.flushed)}.txt")
        self.files.append(path)
        return path


class FailingSink(RecordingSink):
    """Sink whose destination can never be written."""

    def flush(self, content: str) -> Path:
        raise SinkError(Path("/unwritable/output.txt"), "Permission denied")


@pytest.fixture()
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def failing_sink() -> FailingSink:
    return FailingSink()


def build_site(pages: Dict[str, PageSpec], hits: Counter, delays: Dict[str, float] | None = None) -> web.Application:
    """Build an aiohttp app serving *pages*; every request is counted in *hits*."""
    app = web.Application()
    delays = delays or {}

    def make_handler(path: str, spec: PageSpec):
        if isinstance(spec, str):
            body, content_type, status = spec, "text/html", 200
        elif len(spec) == 2:
            (body, content_type), status = spec, 200
        else:
            body, content_type, status = spec

        async def handler(_request):
            hits[path] += 1
            if path in delays:
                await asyncio.sleep(delays[path])
            return web.Response(text=body, content_type=content_type, status=status)

        return handler

    for path, spec in pages.items():
        app.router.add_get(path, make_handler(path, spec))
    return app


@pytest_asyncio.fixture
async def serve() -> Callable[[web.Application], Awaitable[str]]:
    """Start apps on free local ports; yields a starter returning the base URL."""
    runners: List[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        runners.append(runner)
        port = runner.addresses[0][1]
        return f"http://127.0.0.1:{port}"

    yield _start

    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., CrawlerConfig]:
    """Return a factory for quick-to-run crawler configs writing into tmp_path/out."""

    def _make(seed_url: str, **overrides) -> CrawlerConfig:
        data = {
            "seed_url": seed_url,
            "output_dir": tmp_path / "out",
            "timeout": 2.0,
            "retry_times": 0,
            "retry_backoff": 0.0,
            "user_agent": "TestAgent/1.0",
        }
        data.update(overrides)
        return CrawlerConfig(**data)

    return _make


def read_output(paths) -> str:
    """Concatenate output files in the order they were written."""
    return "".join(Path(p).read_text(encoding="utf-8") for p in paths)
