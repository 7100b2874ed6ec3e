# File: tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pytest

from wiki_crawl.config import CrawlerConfig
from wiki_crawl.crawler.fetcher import snapshot_path
from wiki_crawl.crawler.models import ContentBlocks
from wiki_crawl.errors import RetrievalError
from wiki_crawl.index.memory import MemoryIndex
from wiki_crawl.parser.html_parser import select_paragraphs

ORIGIN = "https://en.wikipedia.org"
PAGE_A = f"{ORIGIN}/wiki/A"
PAGE_B = f"{ORIGIN}/wiki/B"
PAGE_C = f"{ORIGIN}/wiki/C"
PAGE_D = f"{ORIGIN}/wiki/D"


def article(*paragraphs: str) -> str:
    """Wrap paragraph markup the way a rendered wiki article is laid out."""
    body = "".join(f"<p>{p}</p>" for p in paragraphs)
    return (
        "<html><head><title>T</title></head><body>"
        '<div id="mw-navigation"><p><a href="/wiki/Main_Page">Main</a></p></div>'
        f'<div id="mw-content-text">{body}</div>'
        "</body></html>"
    )


#: A links to B and C internally and to X externally; B links to D and back to A.
PAGES: Dict[str, str] = {
    PAGE_A: article(
        'The first <a href="/wiki/B">B page</a> and <a href="https://example.com/X">X</a>.',
        'Then the <a href="/wiki/C">C page</a>.',
    ),
    PAGE_B: article('See <a href="/wiki/D">D</a> or go back to <a href="/wiki/A">A</a>.'),
    PAGE_C: article("No links here, the end."),
    PAGE_D: article("Leaf page."),
}


class FakeSource:
    """Content source backed by dicts; records every call."""

    def __init__(self, live: Dict[str, str], snapshot: Dict[str, str] | None = None) -> None:
        self.live = live
        self.snapshot = live if snapshot is None else snapshot
        self.calls: List[tuple[str, str]] = []

    async def fetch_live(self, url: str) -> ContentBlocks:
        self.calls.append(("live", url))
        if url not in self.live:
            raise RetrievalError(url, "HTTP 404")
        return select_paragraphs(self.live[url])

    async def fetch_snapshot(self, url: str) -> ContentBlocks:
        self.calls.append(("snapshot", url))
        if url not in self.snapshot:
            raise RetrievalError(url, "no snapshot")
        return select_paragraphs(self.snapshot[url])


class RecordingIndex(MemoryIndex):
    """MemoryIndex that remembers every submission."""

    def __init__(self) -> None:
        super().__init__()
        self.submitted: List[str] = []

    async def index_page(self, url, blocks) -> None:
        self.submitted.append(url)
        await super().index_page(url, blocks)


@pytest.fixture()
def source() -> FakeSource:
    return FakeSource(PAGES)


@pytest.fixture()
def index() -> RecordingIndex:
    return RecordingIndex()


@pytest.fixture()
def snapshot_dir(tmp_path: Path) -> Path:
    """Write PAGES into a snapshot tree laid out as <host>/<path>."""
    root = tmp_path / "resources"
    for url, html in PAGES.items():
        path = snapshot_path(root, url)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    return root


@pytest.fixture()
def config(snapshot_dir: Path) -> CrawlerConfig:
    return CrawlerConfig(
        seed_url=PAGE_A,
        snapshot_dir=snapshot_dir,
        timeout=2.0,
        user_agent="TestAgent/1.0",
        report_term="the",
        preload_seed_links=False,
    )
