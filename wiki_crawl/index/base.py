"""wiki_crawl.index.base: index store interface."""

from __future__ import annotations

from typing import Dict, Protocol, Set

from wiki_crawl.crawler.models import ContentBlocks, PageID

__all__ = ["IndexStore"]


class IndexStore(Protocol):
    """Persistent term -> page -> count postings plus page membership."""

    async def is_indexed(self, url: PageID) -> bool: ...

    async def index_page(self, url: PageID, blocks: ContentBlocks) -> None:
        """Upsert: replaces any postings previously stored for *url*."""
        ...

    async def get_counts(self, term: str) -> Dict[PageID, int]: ...

    async def get_urls(self, term: str) -> Set[PageID]: ...

    async def get_count(self, url: PageID, term: str) -> int: ...

    async def clear(self) -> None: ...

    async def __aenter__(self) -> "IndexStore": ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...
