"""One-shot interface: run a single search, print the results, exit."""

from __future__ import annotations

import asyncio

from intranet_search.search.aggregator import SearchAggregator
from intranet_search.search.formatters import render_results
from intranet_search.search.interface import SearchBackend
from intranet_search.search.models import ContentType


async def run_oneshot(
    query: str,
    search_type: str = "all",
    page: int = 1,
    backend: SearchBackend | None = None,
) -> int:
    text = (query or "").strip()
    if not text:
        print("Error: query must not be empty")
        return 2
    try:
        content_type = ContentType(search_type)
    except ValueError:
        allowed = ", ".join(t.value for t in ContentType)
        print(f"Error: unknown type {search_type!r} (expected one of: {allowed})")
        return 2

    async with SearchAggregator(backend, search_type=content_type, debounce_ms=0) as aggregator:
        aggregator.set_query(text)
        await aggregator.wait_idle()
        if page != 1 and not aggregator.error:
            aggregator.handle_page_change(page)
            if aggregator.page != page:
                print(f"Error: page {page} is out of range (1-{aggregator.total_pages})")
                return 2
            await aggregator.wait_idle()
        state = aggregator.state

    print(render_results(state))
    return 1 if state.error else 0


def main(query: str, search_type: str = "all", page: int = 1) -> int:
    return asyncio.run(run_oneshot(query=query, search_type=search_type, page=page))
