# wiki_crawl/crawler/link_extractor.py
"""
Internal link extraction for wiki_crawl.
"""
from __future__ import annotations

from typing import Iterable, List

from bs4.element import Tag

from wiki_crawl.crawler.models import PageID

WIKI_ORIGIN = "https://en.wikipedia.org"
WIKI_PREFIX = "/wiki/"

__all__ = ("WIKI_ORIGIN", "WIKI_PREFIX", "is_internal", "extract_internal_links")


def is_internal(href: str, prefix: str = WIKI_PREFIX) -> bool:
    """Return True if the raw reference points at article content."""
    return href.startswith(prefix)


def extract_internal_links(
    blocks: Iterable[Tag],
    origin: str = WIKI_ORIGIN,
    prefix: str = WIKI_PREFIX,
) -> List[PageID]:
    """
    Collect internal links from content blocks.

    Blocks are scanned in the given order, anchors inside a block in document
    order. A link is kept iff its raw ``href`` starts with *prefix*; it is
    resolved as ``origin + href`` verbatim. Duplicates are kept.
    """
    links: List[PageID] = []
    for block in blocks:
        for tag in block.select("a[href]"):
            href_val = tag.get("href")
            if not isinstance(href_val, str):
                continue
            if is_internal(href_val, prefix):
                links.append(origin + href_val)
    return links
