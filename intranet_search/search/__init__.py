"""Unified intranet search: aggregator, result models and the portal backend."""

from intranet_search.search.models import (
    ContentType,
    PaginationInfo,
    SearchQuery,
    SearchResultPage,
)
from intranet_search.search.interface import SearchBackend, SearchRequestError
from intranet_search.search.aggregator import SearchAggregator, SearchState

__all__ = [
    "ContentType",
    "PaginationInfo",
    "SearchQuery",
    "SearchResultPage",
    "SearchBackend",
    "SearchRequestError",
    "SearchAggregator",
    "SearchState",
]
