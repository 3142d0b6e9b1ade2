"""Portal search backend (GET /search on the intranet API)."""

from typing import Any

import httpx
from pydantic import ValidationError

from intranet_search.core.config import config
from intranet_search.search.interface import SearchBackend, SearchRequestError
from intranet_search.search.models import SearchQuery, SearchResultPage


class PortalSearchBackend(SearchBackend):
    """Calls the portal's unified search endpoint across all four content types."""

    def __init__(
        self,
        base_url: str | None = None,
        session_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        url = (base_url or config.portal_base_url or "").rstrip("/")
        if url and not url.endswith("/search"):
            url = url + "/search"
        self._search_url = url
        token = config.session_token if session_token is None else session_token
        self._cookies = {config.session_cookie_name: token} if token else {}
        self._timeout = timeout if timeout is not None else config.timeout_seconds
        self._transport = transport

    @property
    def search_url(self) -> str:
        return self._search_url

    def build_params(self, query: SearchQuery, limit: int) -> dict[str, Any]:
        return {
            "query": query.text,
            "type": query.type.value,
            "page": query.page,
            "limit": limit,
        }

    async def search(self, query: SearchQuery, limit: int = 10) -> SearchResultPage:
        if not self._search_url:
            raise SearchRequestError("Portal base URL is not configured")
        params = self.build_params(query, limit)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                cookies=self._cookies,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self._search_url,
                    params=params,
                    follow_redirects=True,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise SearchRequestError(f"Search timed out after {self._timeout:g}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise SearchRequestError(f"Search returned HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise SearchRequestError(f"Search request failed: {e!s}") from e
        except ValueError as e:
            raise SearchRequestError(f"Search returned invalid JSON: {e!s}") from e
        return self._parse_response(data)

    def _parse_response(self, data: Any) -> SearchResultPage:
        if not isinstance(data, dict):
            raise SearchRequestError(f"Search returned {type(data).__name__}, expected object")
        try:
            return SearchResultPage.model_validate(data)
        except ValidationError as e:
            raise SearchRequestError(
                f"Search response is malformed ({e.error_count()} errors)"
            ) from e
