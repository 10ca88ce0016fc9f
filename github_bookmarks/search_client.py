"""Async GitHub REST search client using httpx."""

import asyncio
import logging

import httpx

from .errors import MalformedResponse, SearchFailed
from .models import ApiResponse, Result, SearchType, parse_result
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"

# Transient error backoff settings
BACKOFF_FACTOR = 1.5
MAX_RETRIES = 2


class _RetryableError(Exception):
    def __init__(self, status):
        self.status = status


class SearchClient:
    """Thin client for GitHub's search/repositories and search/users endpoints.

    No auth, no pagination: one GET per search with the term as ``q``.
    Connection errors and 5xx answers are retried with exponential backoff;
    everything else surfaces as SearchFailed.
    """

    def __init__(
        self,
        api_base: str = API_BASE,
        timeout: float = 30.0,
        max_retries: int = MAX_RETRIES,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_base = api_base.rstrip("/")
        self._max_retries = max_retries
        self._client = httpx.AsyncClient(
            headers={"Accept": "application/vnd.github+json"},
            timeout=timeout,
            transport=transport,
        )

    async def _do_fetch(self, endpoint: str, params: dict) -> ApiResponse:
        # One request, no retry
        resp = await self._client.request("GET", f"{self._api_base}/{endpoint}", params=params)

        if resp.status_code >= 500:
            raise _RetryableError(resp.status_code)

        if not 200 <= resp.status_code < 300:
            raise SearchFailed(f"GitHub API error {resp.status_code}", status=resp.status_code)

        try:
            body = resp.json() if resp.content else {}
        except ValueError as e:
            raise MalformedResponse("Response body is not valid JSON", status=resp.status_code) from e

        return ApiResponse(status=resp.status_code, body=body)

    async def api(self, endpoint: str, params: dict | None = None) -> ApiResponse:
        """GET a REST endpoint, retrying transient failures.

        Args:
            endpoint: API path, e.g. "search/users"
            params: Query parameters dict

        Returns:
            ApiResponse with the status code and decoded body.
        """
        endpoint = endpoint.lstrip("/")
        params = params or {}
        last_error = "unknown error"

        for attempt in range(self._max_retries + 1):
            if attempt:
                await asyncio.sleep(BACKOFF_FACTOR**attempt)
            try:
                return await self._do_fetch(endpoint, params)
            except _RetryableError as e:
                last_error = f"GitHub API error {e.status}"
            except (httpx.ConnectError, httpx.RemoteProtocolError, httpx.ReadError, httpx.TimeoutException) as e:
                last_error = f"Network error: {e}"
            logger.info("GET %s failed (%s), attempt %d/%d", endpoint, last_error, attempt + 1, self._max_retries + 1)

        raise SearchFailed(f"{last_error} after {self._max_retries + 1} attempts")

    async def search(self, search_type: SearchType | str, term: str) -> list[Result]:
        """Search GitHub for term and return the first page of results."""
        search_type = SearchType(search_type)
        resp = await self.api(f"search/{search_type.value}", params={"q": term})

        items = resp.body.get("items") if isinstance(resp.body, dict) else None
        if not isinstance(items, list):
            raise MalformedResponse("Response has no items list", status=resp.status)

        try:
            results = [parse_result(search_type, item) for item in items]
        except (TypeError, AttributeError, ValueError) as e:
            raise MalformedResponse(f"Unreadable search result: {e}", status=resp.status) from e
        logger.debug("search/%s q=%r returned %d results", search_type.value, term, len(results))
        return results

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


def get_search_client(settings: Settings | None = None, transport=None) -> SearchClient:
    """Build a SearchClient from settings."""
    settings = settings or get_settings()
    return SearchClient(
        api_base=settings.api_base,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        transport=transport,
    )
