"""wiki_crawl.errors: crawler and index store exceptions."""

from __future__ import annotations

__all__ = ["WikiCrawlError", "RetrievalError", "IndexUnavailableError"]


class WikiCrawlError(Exception):
    """Base class for every wiki_crawl error."""


class RetrievalError(WikiCrawlError, IOError):
    """Content for a page could not be fetched or parsed.

    ``url`` is kept so that a caller can put the page back on the frontier.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class IndexUnavailableError(WikiCrawlError):
    """The index store is unreachable or rejected a command."""
