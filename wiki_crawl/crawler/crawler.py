# wiki_crawl/crawler/crawler.py
"""
Breadth-first crawler that feeds pages into an index store.

One call to :meth:`WikiCrawler.crawl` is one step: dequeue the oldest
frontier entry, fetch it, index it and append its internal links.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Tuple

from wiki_crawl.crawler.fetcher import ContentSource
from wiki_crawl.crawler.link_extractor import WIKI_ORIGIN, WIKI_PREFIX, extract_internal_links
from wiki_crawl.crawler.models import ContentBlocks, CrawlResult, CrawlStatus, PageID
from wiki_crawl.errors import RetrievalError
from wiki_crawl.index.base import IndexStore
from wiki_crawl.logger import get_logger

__all__ = ("WikiCrawler",)


class WikiCrawler:
    """FIFO frontier over wiki pages, single actor, one step per ``crawl()``."""

    def __init__(
        self,
        source: PageID,
        index: IndexStore,
        fetcher: ContentSource,
        *,
        extra_urls: Iterable[PageID] = (),
        origin: str = WIKI_ORIGIN,
        prefix: str = WIKI_PREFIX,
    ) -> None:
        self.source = source
        self.index = index
        self.fetcher = fetcher
        self.origin = origin
        self.prefix = prefix
        self._queue: Deque[PageID] = deque([source])
        self._queue.extend(extra_urls)
        self.logger = get_logger("crawler")

    @property
    def frontier(self) -> Tuple[PageID, ...]:
        """Snapshot of the pending URLs, head first."""
        return tuple(self._queue)

    def queue_size(self) -> int:
        return len(self._queue)

    def enqueue(self, *urls: PageID) -> None:
        """Append URLs at the tail, e.g. to retry a page whose fetch failed."""
        self._queue.extend(urls)

    def queue_internal_links(self, blocks: ContentBlocks) -> int:
        """Append every internal link found in *blocks*; returns how many."""
        links = extract_internal_links(blocks, self.origin, self.prefix)
        self._queue.extend(links)
        return len(links)

    async def crawl(self, replay: bool = False) -> CrawlResult:
        """
        Take one page off the frontier and index it.

        With ``replay`` the page comes from the snapshot source and the
        already-indexed check is bypassed. A fetch failure propagates as
        :class:`RetrievalError`; the page is not put back.
        """
        if not self._queue:
            return CrawlResult.empty()

        url = self._queue.popleft()
        if not replay and await self.index.is_indexed(url):
            self.logger.debug("Already indexed, skipping %s", url)
            return CrawlResult(CrawlStatus.SKIPPED, url)

        try:
            if replay:
                blocks = await self.fetcher.fetch_snapshot(url)
            else:
                blocks = await self.fetcher.fetch_live(url)
        except RetrievalError as exc:
            self.logger.warning("Dropped %s: %s", url, exc.reason)
            raise

        await self.index.index_page(url, blocks)
        added = self.queue_internal_links(blocks)
        self.logger.info("Indexed %s (+%d links, queue=%d)", url, added, len(self._queue))
        return CrawlResult(CrawlStatus.INDEXED, url)
