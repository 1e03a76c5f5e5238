"""
Web Search Service (Google Custom Search)

Handles:
- Calling the Custom Search JSON API with a bounded timeout
- Memoizing results in the SearchCache for its TTL
- Mapping provider failures to UpstreamError (never retried)
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

import httpx

from backend_model.config import settings
from backend_model.exceptions import ConfigurationError, UpstreamError, ValidationError
from backend_model.logger import logger
from backend_api.services.search_cache import SearchCache


search_logger = logger.bind(context="search")


class GoogleSearchClient:
    """Thin async client for the Custom Search JSON API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        cx: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        num_results: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.cx = cx if cx is not None else settings.google_cx
        self.base_url = base_url or settings.google_search_url
        self.timeout = timeout or settings.search_timeout
        self.num_results = num_results or settings.search_result_limit

        # HTTP client (lazy initialized unless injected)
        self._client = client
        self._client_lock = asyncio.Lock()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.cx)

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client"""
        async with self._client_lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
            return self._client

    async def close_client(self):
        """Close the HTTP client (call on shutdown)"""
        async with self._client_lock:
            if self._client and not self._client.is_closed:
                await self._client.aclose()
                self._client = None

    async def search(self, query: str) -> Dict[str, Any]:
        """
        Run a single search request.

        Args:
            query: Search text

        Returns:
            Payload with the result items and the raw provider response

        Raises:
            ConfigurationError: API key or engine id not set
            UpstreamError: provider returned an error status, timed out, or was unreachable
        """
        if not self.is_configured:
            raise ConfigurationError("Server missing GOOGLE_API_KEY or GOOGLE_CX in .env")

        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
            "num": self.num_results,
        }

        client = await self.get_client()
        search_logger.info(f"Custom Search request: {query[:100]}")

        try:
            # Per-phase httpx timeouts do not cap the total, so bound the whole call
            response = await asyncio.wait_for(client.get(self.base_url, params=params), self.timeout)
            response.raise_for_status()
        except asyncio.TimeoutError as e:
            search_logger.error(f"Custom Search exceeded {self.timeout}s deadline")
            raise UpstreamError("customsearch failed", status_code=504,
                                details=f"Request timed out after {self.timeout}s") from e
        except httpx.TimeoutException as e:
            search_logger.error(f"Custom Search timeout after {self.timeout}s: {e}")
            raise UpstreamError("customsearch failed", status_code=504,
                                details=f"Request timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            details = _error_body(e.response)
            search_logger.error(f"Custom Search HTTP error: {e.response.status_code} - {details}")
            raise UpstreamError("customsearch failed", status_code=e.response.status_code,
                                details=details) from e
        except httpx.RequestError as e:
            search_logger.error(f"Custom Search request error: {e}")
            raise UpstreamError("customsearch failed", status_code=502, details=str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            search_logger.error(f"Custom Search returned a non-JSON body: {e}")
            raise UpstreamError("customsearch failed", status_code=502, details=response.text) from e
        if not isinstance(data, dict):
            search_logger.error(f"Custom Search returned unexpected JSON: {type(data).__name__}")
            raise UpstreamError("customsearch failed", status_code=502, details=response.text)

        items = data.get("items") or []
        search_logger.info(f"Custom Search returned {len(items)} items")
        return {"results": items, "raw": data}


def _error_body(response: httpx.Response) -> Any:
    """Provider error body as JSON when possible, else text"""
    try:
        return response.json()
    except ValueError:
        return response.text


class WebSearchService:
    """Cache-fronted search used by /api/search and internet chat"""

    def __init__(self, client: GoogleSearchClient, cache: SearchCache):
        self.client = client
        self.cache = cache

    async def search(self, query: str) -> Tuple[bool, Dict[str, Any]]:
        """
        Look up query in the cache, falling back to the provider on a miss.

        Returns:
            (cached, payload) where cached is True when served from the cache
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("q param required")

        key = SearchCache.make_key(query)
        entry = self.cache.lookup(key)
        if entry is not None:
            search_logger.debug(f"Search cache hit: {key}")
            return True, entry.payload

        payload = await self.client.search(query)
        self.cache.store(key, payload)
        return False, payload
