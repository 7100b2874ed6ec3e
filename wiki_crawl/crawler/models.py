"""
Data models for the wiki_crawl crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from bs4.element import Tag

#: Absolute page URL. Compared as a plain string, no normalisation.
PageID = str

#: Paragraph elements of a page's main content, in document order.
ContentBlocks = List[Tag]


class CrawlStatus(str, Enum):
    """Outcome of a single crawl step."""

    INDEXED = "indexed"
    SKIPPED = "skipped"
    EMPTY = "empty"


@dataclass(slots=True, frozen=True)
class CrawlResult:
    """Tagged result of :meth:`WikiCrawler.crawl`.

    ``url`` is the dequeued page for INDEXED and SKIPPED, ``None`` for EMPTY.
    """

    status: CrawlStatus
    url: Optional[PageID] = None

    @property
    def indexed(self) -> bool:
        return self.status is CrawlStatus.INDEXED

    @classmethod
    def empty(cls) -> CrawlResult:
        return cls(CrawlStatus.EMPTY)
