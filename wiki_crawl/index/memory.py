"""In-process index store, used by tests and ``crawl --memory`` runs."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Set

from wiki_crawl.crawler.models import ContentBlocks, PageID
from wiki_crawl.index.terms import count_terms
from wiki_crawl.logger import get_logger

__all__ = ["MemoryIndex"]

log = get_logger("index")


class MemoryIndex:
    """Keeps one term counter per page; re-indexing a page replaces it."""

    def __init__(self) -> None:
        self._pages: Dict[PageID, Counter[str]] = {}

    async def is_indexed(self, url: PageID) -> bool:
        return url in self._pages

    async def index_page(self, url: PageID, blocks: ContentBlocks) -> None:
        counts = count_terms(blocks)
        self._pages[url] = counts
        log.debug("Indexed %s (%d terms)", url, len(counts))

    async def get_counts(self, term: str) -> Dict[PageID, int]:
        return {url: c[term] for url, c in self._pages.items() if c[term] > 0}

    async def get_urls(self, term: str) -> Set[PageID]:
        return {url for url, c in self._pages.items() if c[term] > 0}

    async def get_count(self, url: PageID, term: str) -> int:
        counts = self._pages.get(url)
        return counts[term] if counts else 0

    async def clear(self) -> None:
        self._pages.clear()

    def __len__(self) -> int:
        return len(self._pages)

    async def __aenter__(self) -> MemoryIndex:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None
