from collections.abc import AsyncIterator

import pytest_asyncio

from intranet_search.search.aggregator import SearchAggregator


@pytest_asyncio.fixture
async def aggregator() -> AsyncIterator[SearchAggregator]:
    """Aggregator against the configured portal, for e2e/integration suites only."""
    instance = SearchAggregator(debounce_ms=0)
    try:
        yield instance
    finally:
        await instance.close()
