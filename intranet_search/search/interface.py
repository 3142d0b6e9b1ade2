"""Standard interface for search backends used by the aggregator."""

from abc import ABC, abstractmethod

from intranet_search.search.models import SearchQuery, SearchResultPage


class SearchRequestError(RuntimeError):
    """Search call failed: transport error, timeout, non-2xx status or malformed body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SearchBackend(ABC):
    """Base for the unified search endpoint client (and test fakes)."""

    @abstractmethod
    async def search(self, query: SearchQuery, limit: int = 10) -> SearchResultPage:
        """Run one search; raise SearchRequestError on any failure."""
        pass

    async def close(self) -> None:
        pass
