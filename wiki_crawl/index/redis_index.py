"""
Redis-backed index store.

Key layout::

    URLSet:<term>        set of page URLs that contain <term>
    TermCounter:<url>    hash term -> count for one page
    IndexedPages         set of every indexed page URL
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Set

import redis.asyncio as redis
from redis.exceptions import RedisError

from wiki_crawl.crawler.models import ContentBlocks, PageID
from wiki_crawl.errors import IndexUnavailableError
from wiki_crawl.index.terms import count_terms
from wiki_crawl.logger import get_logger

__all__ = ["RedisIndex"]

log = get_logger("index")

URLSET_PREFIX = "URLSet:"
COUNTER_PREFIX = "TermCounter:"
INDEXED_KEY = "IndexedPages"


def url_set_key(term: str) -> str:
    return URLSET_PREFIX + term


def term_counter_key(url: PageID) -> str:
    return COUNTER_PREFIX + url


@contextmanager
def _redis_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except RedisError as exc:
        raise IndexUnavailableError(f"{operation} failed: {exc}") from exc


class RedisIndex:
    """Inverted index over Redis, written through ``redis.asyncio``."""

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> RedisIndex:
        return cls(redis.from_url(url, decode_responses=True))

    async def __aenter__(self) -> RedisIndex:
        await self.ping()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.client.aclose()

    async def ping(self) -> None:
        with _redis_errors("ping"):
            await self.client.ping()

    async def is_indexed(self, url: PageID) -> bool:
        with _redis_errors("is_indexed"):
            return bool(await self.client.sismember(INDEXED_KEY, url))

    async def index_page(self, url: PageID, blocks: ContentBlocks) -> None:
        """Replace the postings for *url* in one MULTI/EXEC transaction."""
        counts = count_terms(blocks)
        counter_key = term_counter_key(url)
        with _redis_errors("index_page"):
            stale: List[str] = await self.client.hkeys(counter_key)
            async with self.client.pipeline(transaction=True) as pipe:
                for term in stale:
                    pipe.srem(url_set_key(term), url)
                pipe.delete(counter_key)
                if counts:
                    pipe.hset(counter_key, mapping=dict(counts))
                for term in counts:
                    pipe.sadd(url_set_key(term), url)
                pipe.sadd(INDEXED_KEY, url)
                await pipe.execute()
        log.debug("Indexed %s (%d terms, %d stale)", url, len(counts), len(stale))

    async def get_urls(self, term: str) -> Set[PageID]:
        with _redis_errors("get_urls"):
            return set(await self.client.smembers(url_set_key(term)))

    async def get_count(self, url: PageID, term: str) -> int:
        with _redis_errors("get_count"):
            value: Optional[str] = await self.client.hget(term_counter_key(url), term)
        return int(value) if value is not None else 0

    async def get_counts(self, term: str) -> Dict[PageID, int]:
        urls = sorted(await self.get_urls(term))
        if not urls:
            return {}
        with _redis_errors("get_counts"):
            async with self.client.pipeline(transaction=False) as pipe:
                for url in urls:
                    pipe.hget(term_counter_key(url), term)
                values = await pipe.execute()
        return {url: int(v) for url, v in zip(urls, values) if v is not None}

    async def clear(self) -> None:
        """Delete every key this index owns."""
        with _redis_errors("clear"):
            keys = [INDEXED_KEY]
            for pattern in (URLSET_PREFIX + "*", COUNTER_PREFIX + "*"):
                keys.extend([k async for k in self.client.scan_iter(match=pattern)])
            await self.client.delete(*keys)
        log.info("Cleared %d index keys", len(keys))
