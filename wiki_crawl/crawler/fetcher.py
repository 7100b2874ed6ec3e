# wiki_crawl/crawler/fetcher.py
"""
Fetcher module: obtains content blocks for a page, either live over HTTP or
from an offline snapshot directory.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Protocol, Union
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from wiki_crawl.config import CrawlerConfig
from wiki_crawl.crawler.models import ContentBlocks, PageID
from wiki_crawl.errors import RetrievalError
from wiki_crawl.logger import get_logger
from wiki_crawl.parser.html_parser import select_paragraphs

__all__ = ("ContentSource", "WikiFetcher", "snapshot_path")

log = get_logger("fetcher")


class ContentSource(Protocol):
    """Anything that can turn a page identifier into content blocks."""

    async def fetch_live(self, url: PageID) -> ContentBlocks: ...

    async def fetch_snapshot(self, url: PageID) -> ContentBlocks: ...


def snapshot_path(snapshot_dir: Union[str, Path], url: PageID) -> Path:
    """Map a page URL to its snapshot file: ``<dir>/<host><path>``."""
    parts = urlsplit(url)
    return Path(snapshot_dir) / parts.netloc / parts.path.lstrip("/")


class WikiFetcher:
    """Handles live HTTP fetching and snapshot reads for wiki pages."""

    def __init__(
        self,
        config: CrawlerConfig,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> WikiFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch_live(self, url: PageID) -> ContentBlocks:
        """
        Download the page and return its paragraphs.

        Raises RetrievalError on a non-200 status, a client error, a timeout
        or a body that does not decode.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        log.debug("Fetching %s", url)
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    raise RetrievalError(url, f"HTTP {resp.status}")
                html = await resp.text()
        except (ClientError, asyncio.TimeoutError) as exc:
            raise RetrievalError(url, f"{type(exc).__name__}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise RetrievalError(url, f"undecodable body: {exc.reason}") from exc
        return self._parse(url, html)

    async def fetch_snapshot(self, url: PageID) -> ContentBlocks:
        """Read the page from the snapshot directory; a missing file is an error."""
        path = snapshot_path(self.config.snapshot_dir, url)
        log.debug("Reading snapshot %s", path)
        try:
            html = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise RetrievalError(url, f"undecodable snapshot {path}: {exc.reason}") from exc
        except OSError as exc:
            raise RetrievalError(url, f"no snapshot at {path}") from exc
        return self._parse(url, html)

    def _parse(self, url: PageID, html: str) -> ContentBlocks:
        try:
            return select_paragraphs(html, self.config.content_selector, self.config.block_selector)
        except LookupError as exc:
            raise RetrievalError(url, str(exc)) from exc
