# Test-suite for the breadth-first crawl step
from __future__ import annotations

import pytest

from wiki_crawl.crawler.crawler import WikiCrawler
from wiki_crawl.crawler.models import CrawlResult, CrawlStatus
from wiki_crawl.errors import RetrievalError
from wiki_crawl.parser.html_parser import select_paragraphs

from .conftest import PAGE_A, PAGE_B, PAGE_C, PAGE_D, PAGES, FakeSource, RecordingIndex


# --------------------------------------------------------------------------- #
#                               Frontier basics                               #
# --------------------------------------------------------------------------- #


def test_seed_is_enqueued(index, source):
    crawler = WikiCrawler(PAGE_A, index, source)
    assert crawler.queue_size() == 1
    assert crawler.frontier == (PAGE_A,)


def test_extra_urls_follow_seed_in_order(index, source):
    crawler = WikiCrawler(PAGE_A, index, source, extra_urls=[PAGE_C, PAGE_B, PAGE_C])
    assert crawler.frontier == (PAGE_A, PAGE_C, PAGE_B, PAGE_C)


@pytest.mark.asyncio()
async def test_fifo_order_with_duplicates(index, source):
    crawler = WikiCrawler(PAGE_C, index, source, extra_urls=[PAGE_D, PAGE_C, PAGE_D])
    seen = []
    for _ in range(4):
        seen.append((await crawler.crawl(replay=True)).url)
    assert seen == [PAGE_C, PAGE_D, PAGE_C, PAGE_D]
    assert crawler.queue_size() == 0


def test_queue_internal_links_appends_at_tail(index, source):
    crawler = WikiCrawler(PAGE_D, index, source)
    added = crawler.queue_internal_links(select_paragraphs(PAGES[PAGE_A]))
    assert added == 2
    assert crawler.frontier == (PAGE_D, PAGE_B, PAGE_C)


# --------------------------------------------------------------------------- #
#                                 Crawl step                                  #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_empty_frontier_is_terminal(index, source):
    crawler = WikiCrawler(PAGE_C, index, source)
    await crawler.crawl()
    index.submitted.clear()
    source.calls.clear()

    for replay in (False, True):
        result = await crawler.crawl(replay)
        assert result == CrawlResult.empty()
        assert result.url is None
    assert crawler.queue_size() == 0
    assert index.submitted == []
    assert source.calls == []


@pytest.mark.asyncio()
async def test_end_to_end_live(index, source):
    crawler = WikiCrawler(PAGE_A, index, source)

    first = await crawler.crawl(False)
    assert first == CrawlResult(CrawlStatus.INDEXED, PAGE_A)
    assert first.indexed
    assert await index.is_indexed(PAGE_A)
    assert (await index.get_counts("first")) == {PAGE_A: 1}
    assert crawler.frontier == (PAGE_B, PAGE_C)

    second = await crawler.crawl(False)
    assert second.url == PAGE_B
    assert crawler.frontier == (PAGE_C, PAGE_D, PAGE_A)
    assert source.calls == [("live", PAGE_A), ("live", PAGE_B)]


@pytest.mark.asyncio()
async def test_already_indexed_head_is_skipped(index, source):
    await index.index_page(PAGE_A, select_paragraphs(PAGES[PAGE_A]))
    index.submitted.clear()
    crawler = WikiCrawler(PAGE_A, index, source)

    result = await crawler.crawl(False)

    assert result == CrawlResult(CrawlStatus.SKIPPED, PAGE_A)
    assert not result.indexed
    assert index.submitted == []
    assert source.calls == []
    assert crawler.queue_size() == 0


@pytest.mark.asyncio()
async def test_skip_and_empty_are_distinguishable(index, source):
    await index.index_page(PAGE_C, select_paragraphs(PAGES[PAGE_C]))
    crawler = WikiCrawler(PAGE_C, index, source)
    assert (await crawler.crawl()).status is CrawlStatus.SKIPPED
    assert (await crawler.crawl()).status is CrawlStatus.EMPTY


@pytest.mark.asyncio()
async def test_replay_reindexes_and_requeues(index, source):
    await index.index_page(PAGE_A, select_paragraphs(PAGES[PAGE_A]))
    index.submitted.clear()
    crawler = WikiCrawler(PAGE_A, index, source)

    result = await crawler.crawl(replay=True)

    assert result == CrawlResult(CrawlStatus.INDEXED, PAGE_A)
    assert index.submitted == [PAGE_A]
    assert source.calls == [("snapshot", PAGE_A)]
    assert crawler.frontier == (PAGE_B, PAGE_C)
    # re-indexing overwrites, counts do not double
    assert (await index.get_counts("first")) == {PAGE_A: 1}


@pytest.mark.asyncio()
async def test_replay_uses_snapshot_source_only():
    snapshot_only = FakeSource(live={}, snapshot=PAGES)

    crawler = WikiCrawler(PAGE_A, RecordingIndex(), snapshot_only)
    assert (await crawler.crawl(replay=True)).indexed
    assert snapshot_only.calls == [("snapshot", PAGE_A)]


# --------------------------------------------------------------------------- #
#                               Fetch failures                                #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_fetch_failure_drops_page(index):
    missing = "https://en.wikipedia.org/wiki/Missing"
    crawler = WikiCrawler(missing, index, FakeSource(PAGES), extra_urls=[PAGE_C])

    with pytest.raises(RetrievalError) as exc_info:
        await crawler.crawl()

    assert exc_info.value.url == missing
    assert isinstance(exc_info.value, IOError)
    assert crawler.frontier == (PAGE_C,)
    assert index.submitted == []


@pytest.mark.asyncio()
async def test_caller_can_requeue_failed_page(index):
    missing = "https://en.wikipedia.org/wiki/Missing"
    source = FakeSource(dict(PAGES))
    crawler = WikiCrawler(missing, index, source)

    with pytest.raises(RetrievalError) as exc_info:
        await crawler.crawl()
    crawler.enqueue(exc_info.value.url)
    source.live[missing] = PAGES[PAGE_D]

    assert (await crawler.crawl()) == CrawlResult(CrawlStatus.INDEXED, missing)


@pytest.mark.asyncio()
async def test_missing_snapshot_is_hard_error(index):
    crawler = WikiCrawler(PAGE_A, index, FakeSource(PAGES, snapshot={}))
    with pytest.raises(RetrievalError):
        await crawler.crawl(replay=True)
    assert crawler.queue_size() == 0
