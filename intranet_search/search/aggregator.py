"""Search aggregator: debounced query state over the unified search endpoint.

Holds the query text, content-type filter and page, and turns each settled
combination into exactly one backend request. Only the most recently issued
request may touch results, loading or error: older requests are cancelled and,
should a response still arrive, dropped by sequence number.

All handlers are synchronous, like UI event callbacks, and must be called from
inside a running event loop since they schedule the debounce and request tasks.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from intranet_search.core.config import config
from intranet_search.core.logger import logger
from intranet_search.search.backends.portal import PortalSearchBackend
from intranet_search.search.interface import SearchBackend, SearchRequestError
from intranet_search.search.models import ContentType, SearchQuery, SearchResultPage


@dataclass(frozen=True)
class SearchState:
    """Snapshot of everything a search UI renders."""

    query: str
    search_type: ContentType
    page: int
    results: SearchResultPage | None
    loading: bool
    error: str | None


Listener = Callable[[SearchState], None]


class SearchAggregator:
    def __init__(
        self,
        backend: SearchBackend | None = None,
        *,
        search_type: ContentType | str = ContentType.ALL,
        limit: int | None = None,
        debounce_ms: int | None = None,
        error_message: str | None = None,
    ):
        if backend is None:
            backend = PortalSearchBackend()
            self._owns_backend = True
        else:
            self._owns_backend = False
        self._backend = backend
        self._limit = limit or config.page_limit
        ms = config.debounce_ms if debounce_ms is None else debounce_ms
        self._debounce_seconds = max(0, ms) / 1000
        self._error_message = error_message or config.error_message

        self._query = ""
        self._search_type = ContentType(search_type)
        self._page = 1
        self._results: SearchResultPage | None = None
        self._loading = False
        self._error: str | None = None

        self._seq = 0
        self._debounce_task: asyncio.Task | None = None
        self._request_task: asyncio.Task | None = None
        self._listeners: list[Listener] = []
        self._closed = False

    async def __aenter__(self) -> "SearchAggregator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def query(self) -> str:
        return self._query

    @property
    def search_type(self) -> ContentType:
        return self._search_type

    @property
    def page(self) -> int:
        return self._page

    @property
    def results(self) -> SearchResultPage | None:
        return self._results

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def debouncing(self) -> bool:
        return self._debounce_task is not None and not self._debounce_task.done()

    @property
    def state(self) -> SearchState:
        return SearchState(
            query=self._query,
            search_type=self._search_type,
            page=self._page,
            results=self._results,
            loading=self._loading,
            error=self._error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with a fresh snapshot after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_query(self, text: str) -> None:
        if self._closed:
            return
        self._query = text
        self._cancel_debounce()
        if not text.strip():
            self._invalidate_request()
            self._page = 1
            self._results = SearchResultPage.empty(self._limit)
            self._loading = False
            self._error = None
            self._notify()
            return
        self._debounce_task = asyncio.create_task(self._debounced(text))
        self._notify()

    def handle_search_type_change(self, search_type: ContentType | str) -> None:
        content_type = ContentType(search_type)
        if self._closed:
            return
        self._search_type = content_type
        self._page = 1
        self._cancel_debounce()
        if not self._query.strip():
            self._notify()
            return
        self._start_search(SearchQuery(self._query, content_type, 1))

    def handle_page_change(self, page: int) -> None:
        if self._closed or page == self._page or page < 1:
            return
        if self.debouncing:
            # Unsettled text restarts at page 1 once the debounce fires.
            return
        if page > self.total_pages:
            logger.debug(f"Page {page} rejected, only {self.total_pages} available")
            return
        if not self._query.strip():
            return
        self._page = page
        self._start_search(SearchQuery(self._query, self._search_type, page))

    @property
    def total_pages(self) -> int:
        """Upper bound for handle_page_change; page 1 is always reachable."""
        if self._results is None:
            return 1
        return max(self._results.pagination.total_pages, 1)

    async def wait_idle(self) -> None:
        """Wait until no debounce timer or request is pending."""
        while True:
            pending = [
                t
                for t in (self._debounce_task, self._request_task)
                if t is not None and not t.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        """Cancel pending work and reset to an empty query. Further calls are no-ops."""
        if self._closed:
            return
        pending = [
            t
            for t in (self._debounce_task, self._request_task)
            if t is not None and not t.done()
        ]
        self._cancel_debounce()
        self._invalidate_request()
        self._query = ""
        self._page = 1
        self._results = None
        self._loading = False
        self._error = None
        self._notify()
        self._closed = True
        self._listeners.clear()
        await asyncio.gather(*pending, return_exceptions=True)
        if self._owns_backend:
            await self._backend.close()

    async def _debounced(self, text: str) -> None:
        await asyncio.sleep(self._debounce_seconds)
        if self._closed or text != self._query:
            return
        self._debounce_task = None
        self._page = 1
        self._start_search(SearchQuery(text, self._search_type, 1))

    def _start_search(self, query: SearchQuery) -> None:
        self._invalidate_request()
        seq = self._seq
        self._loading = True
        self._error = None
        self._notify()
        self._request_task = asyncio.create_task(self._execute_search(seq, query))

    async def _execute_search(self, seq: int, query: SearchQuery) -> None:
        logger.search_request(seq, query.text, query.type.value, query.page, self._limit)
        try:
            page = await self._backend.search(query, limit=self._limit)
        except asyncio.CancelledError:
            logger.search_discarded(seq, self._seq)
            raise
        except SearchRequestError as e:
            if seq != self._seq:
                logger.search_discarded(seq, self._seq)
                return
            logger.search_failed(seq, str(e), e.status_code)
            self._apply_error()
            return
        except Exception as e:
            if seq != self._seq:
                logger.search_discarded(seq, self._seq)
                return
            logger.error(f"Search backend raised {type(e).__name__}", exception=e)
            self._apply_error()
            return
        if seq != self._seq:
            logger.search_discarded(seq, self._seq)
            return
        logger.search_response(seq, page.pagination.total, page.pagination.total_pages)
        self._request_task = None
        self._results = page
        self._page = min(self._page, self.total_pages)
        self._loading = False
        self._error = None
        self._notify()

    def _apply_error(self) -> None:
        self._request_task = None
        self._results = SearchResultPage.empty(self._limit)
        self._page = 1
        self._loading = False
        self._error = self._error_message
        self._notify()

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    def _invalidate_request(self) -> None:
        # Bumping the sequence first makes any late response from the old task stale.
        self._seq += 1
        if self._request_task is not None and not self._request_task.done():
            self._request_task.cancel()
        self._request_task = None

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Search state listener failed")
