# File: wiki_crawl/engine.py
"""wiki_crawl.engine: Оркестрация сессии обхода и сбор итогового отчёта."""

from __future__ import annotations

from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from wiki_crawl.config import CrawlerConfig
from wiki_crawl.crawler.crawler import WikiCrawler
from wiki_crawl.crawler.fetcher import ContentSource, WikiFetcher
from wiki_crawl.crawler.link_extractor import extract_internal_links
from wiki_crawl.crawler.models import CrawlResult, CrawlStatus, PageID
from wiki_crawl.index import IndexStore, open_index
from wiki_crawl.logger import logger

__all__ = ["CrawlReport", "crawl_until_indexed", "run_crawl", "read_counts", "clear_index"]


@dataclass(slots=True)
class CrawlReport:
    """Итог сессии: последний результат шага и счётчики термина по страницам."""

    result: CrawlResult
    steps: int
    term: str
    counts: Dict[PageID, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.result.status.value,
            "url": self.result.url,
            "steps": self.steps,
            "term": self.term,
            "counts": dict(sorted(self.counts.items())),
        }


async def crawl_until_indexed(
    crawler: WikiCrawler,
    *,
    replay: bool = False,
    max_steps: Optional[int] = None,
) -> Tuple[CrawlResult, int]:
    """Шагает краулером, пока страница не проиндексирована или очередь не пуста.

    Возвращает последний результат и число сделанных шагов. При ``max_steps``
    останавливается после указанного числа шагов.
    """
    steps = 0
    result = CrawlResult.empty()
    while max_steps is None or steps < max_steps:
        result = await crawler.crawl(replay)
        if result.status is CrawlStatus.EMPTY:
            break
        steps += 1
        if result.indexed:
            break
    logger.info("Crawl stopped after %d step(s): %s %s", steps, result.status.value, result.url or "")
    return result, steps


async def run_crawl(
    config: CrawlerConfig,
    seed: Optional[PageID] = None,
    *,
    replay: bool = False,
    memory: bool = False,
    preload: Optional[bool] = None,
    max_steps: Optional[int] = None,
    index: Optional[IndexStore] = None,
    fetcher: Optional[ContentSource] = None,
) -> CrawlReport:
    """Собирает краулер по конфигу, прогоняет его и возвращает CrawlReport."""
    seed = seed or config.seed_url
    preload = config.preload_seed_links if preload is None else preload
    max_steps = max_steps or config.max_steps
    logger.info("Starting crawl from %s (replay=%s)", seed, replay)

    async with AsyncExitStack() as stack:
        if fetcher is None:
            fetcher = await stack.enter_async_context(WikiFetcher(config))
        if index is None:
            index = await stack.enter_async_context(open_index(config, memory=memory))

        extra: list[PageID] = []
        if preload:
            blocks = await (fetcher.fetch_snapshot(seed) if replay else fetcher.fetch_live(seed))
            extra = extract_internal_links(blocks, config.origin_str, config.link_prefix)
            logger.debug("Preloaded %d links from %s", len(extra), seed)

        crawler = WikiCrawler(
            seed,
            index,
            fetcher,
            extra_urls=extra,
            origin=config.origin_str,
            prefix=config.link_prefix,
        )
        result, steps = await crawl_until_indexed(crawler, replay=replay, max_steps=max_steps)
        counts = await index.get_counts(config.report_term)

    return CrawlReport(result=result, steps=steps, term=config.report_term, counts=counts)


async def read_counts(config: CrawlerConfig, term: str) -> Dict[PageID, int]:
    """Читает счётчики термина из постоянного индекса."""
    async with open_index(config) as index:
        return await index.get_counts(term)


async def clear_index(config: CrawlerConfig) -> None:
    async with open_index(config) as index:
        await index.clear()
