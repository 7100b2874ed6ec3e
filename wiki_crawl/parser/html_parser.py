"""HTML parsing utilities for wiki_crawl.

Turns a rendered article into its *content blocks*: the paragraph elements of
the main content container, in document order. Both the live fetcher and the
snapshot reader go through :func:`select_paragraphs`, so a page parses the
same way regardless of where it came from.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from wiki_crawl.crawler.models import ContentBlocks

__all__: Sequence[str] = ("select_paragraphs", "find_content_root")


def find_content_root(soup: BeautifulSoup, content_selector: str) -> Optional[Tag]:
    """Return the main content container or ``None`` if the page has none."""
    root = soup.select_one(content_selector)
    return root if isinstance(root, Tag) else None


def select_paragraphs(
    html: str,
    content_selector: str = "#mw-content-text",
    block_selector: str = "p",
) -> ContentBlocks:
    """Parse *html* and return the blocks under the content container.

    Raises
    ------
    LookupError
        The document has no element matching *content_selector*.
    """
    soup = BeautifulSoup(html, "html.parser")
    root = find_content_root(soup, content_selector)
    if root is None:
        raise LookupError(f"no element matches {content_selector!r}")
    return [tag for tag in root.select(block_selector) if isinstance(tag, Tag)]
