"""Test doubles shared by the unit suite."""

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

from intranet_search.search.interface import SearchBackend
from intranet_search.search.models import SearchQuery, SearchResultPage


def make_page(
    documents: int = 0,
    events: int = 0,
    announcements: int = 0,
    posts: int = 0,
    *,
    page: int = 1,
    limit: int = 10,
    total_pages: int | None = None,
    totals: dict[str, int] | None = None,
    tag: str = "",
) -> SearchResultPage:
    """Build a backend payload with n items per type; totals default to the item counts."""
    totals = totals or {}
    counts = {
        "documents": documents,
        "events": events,
        "announcements": announcements,
        "posts": posts,
    }
    per_type = {name: totals.get(name, n) for name, n in counts.items()}
    total = totals.get("total", sum(per_type.values()))
    payload: dict[str, Any] = {
        "documents": [
            {"id": f"d{tag}{i}", "title": f"Doc {tag}{i}", "category": "REPORT", "filePath": f"/f/{i}.pdf"}
            for i in range(documents)
        ],
        "events": [
            {"id": f"e{tag}{i}", "title": f"Event {tag}{i}", "startDate": "2024-05-01T09:00:00"}
            for i in range(events)
        ],
        "announcements": [
            {"id": f"a{tag}{i}", "title": f"Notice {tag}{i}", "content": "..."}
            for i in range(announcements)
        ],
        "posts": [
            {"id": f"p{tag}{i}", "title": f"Post {tag}{i}", "content": "<p>hi</p>"}
            for i in range(posts)
        ],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": total_pages if total_pages is not None else -(-total // limit),
            "totalDocuments": per_type["documents"],
            "totalEvents": per_type["events"],
            "totalAnnouncements": per_type["announcements"],
            "totalPosts": per_type["posts"],
        },
    }
    return SearchResultPage.model_validate(payload)


class ScriptedBackend(SearchBackend):
    """Records every query; answers through a swappable handler (sync or async)."""

    def __init__(self, handler: Callable[[SearchQuery], Any] | None = None):
        self.calls: list[SearchQuery] = []
        self.limits: list[int] = []
        self.handler = handler or (lambda query: make_page(documents=1))
        self.closed = False

    async def search(self, query: SearchQuery, limit: int = 10) -> SearchResultPage:
        self.calls.append(query)
        self.limits.append(limit)
        result = self.handler(query)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def close(self) -> None:
        self.closed = True


async def until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Yield to the loop until predicate holds."""
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.001)


