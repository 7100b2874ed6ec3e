"""wiki_crawl.index: Хранилища полнотекстового индекса."""

from __future__ import annotations

from wiki_crawl.config import CrawlerConfig
from wiki_crawl.index.base import IndexStore
from wiki_crawl.index.memory import MemoryIndex
from wiki_crawl.index.redis_index import RedisIndex
from wiki_crawl.index.terms import count_terms


def open_index(config: CrawlerConfig, *, memory: bool = False) -> IndexStore:
    """Создаёт хранилище индекса по конфигурации."""
    if memory:
        return MemoryIndex()
    return RedisIndex.from_url(config.redis_url)


__all__ = ["IndexStore", "MemoryIndex", "RedisIndex", "count_terms", "open_index"]
