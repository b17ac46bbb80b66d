"""Unit tests for the search debouncer."""

import asyncio

import pytest

from throttle_debounce.services.search_debouncer import SearchDebouncer

DELAY = 0.05


@pytest.mark.asyncio
async def test_searches_trimmed_latest_query():
    debouncer = SearchDebouncer(delay=DELAY, min_length=2)
    queries = []

    debouncer.search("  fl", queries.append)
    debouncer.search("  flutter  ", queries.append)

    assert debouncer.last_query == "flutter"
    await asyncio.sleep(DELAY * 2)

    assert queries == ["flutter"]


@pytest.mark.asyncio
async def test_short_query_clears_results():
    cleared = []
    debouncer = SearchDebouncer(
        delay=DELAY, min_length=3, on_clear_results=lambda: cleared.append(True)
    )
    queries = []

    debouncer.search("ab", queries.append)
    await asyncio.sleep(DELAY * 2)

    assert queries == []
    assert cleared == [True]


@pytest.mark.asyncio
async def test_async_search_and_clear_callbacks():
    searched = asyncio.Event()
    cleared = asyncio.Event()

    async def on_clear():
        cleared.set()

    async def on_search(query):
        searched.set()

    debouncer = SearchDebouncer(delay=DELAY, min_length=1, on_clear_results=on_clear)

    debouncer.search("python", on_search)
    await asyncio.wait_for(searched.wait(), timeout=1.0)

    debouncer.search("   ", on_search)
    await asyncio.wait_for(cleared.wait(), timeout=1.0)


@pytest.mark.asyncio
async def test_untrimmed_queries_keep_whitespace():
    debouncer = SearchDebouncer(delay=DELAY, trim_query=False)
    queries = []

    debouncer.search(" a ", queries.append)
    await asyncio.sleep(DELAY * 2)

    assert queries == [" a "]


def test_would_trigger_search():
    debouncer = SearchDebouncer(min_length=3)

    assert debouncer.would_trigger_search("abc") is True
    assert debouncer.would_trigger_search("  ab  ") is False


@pytest.mark.asyncio
async def test_clear_forgets_query_and_cancels():
    debouncer = SearchDebouncer(delay=DELAY)
    queries = []

    debouncer.search("query", queries.append)
    debouncer.clear()

    assert debouncer.last_query is None
    assert debouncer.is_active is False
    await asyncio.sleep(DELAY * 2)
    assert queries == []
