"""
Tests for the Custom Search client and cached search service
"""

import asyncio

import pytest
from unittest.mock import MagicMock, AsyncMock

import httpx

from backend_model.exceptions import ConfigurationError, UpstreamError, ValidationError
from backend_api.services.search_cache import SearchCache
from backend_api.services.web_search import GoogleSearchClient, WebSearchService
from tests.conftest import FakeClock


SEARCH_URL = "https://www.googleapis.com/customsearch/v1"


def make_http_client(response=None, side_effect=None):
    """Mock httpx.AsyncClient whose get returns response"""
    http_client = MagicMock()
    http_client.is_closed = False
    http_client.get = AsyncMock(return_value=response, side_effect=side_effect)
    return http_client


def make_response(data):
    response = MagicMock()
    response.raise_for_status = MagicMock()
    response.json.return_value = data
    return response


class TestGoogleSearchClient:
    """Tests for GoogleSearchClient"""

    @pytest.mark.asyncio
    async def test_search_success(self):
        """Test items and raw payload are returned"""
        data = {"items": [{"title": "India emissions", "link": "https://example.org"}]}
        http_client = make_http_client(make_response(data))
        client = GoogleSearchClient(api_key="key", cx="cx", base_url=SEARCH_URL, client=http_client)

        payload = await client.search("India emissions")

        assert payload["results"] == data["items"]
        assert payload["raw"] == data
        _, kwargs = http_client.get.call_args
        assert kwargs["params"] == {"key": "key", "cx": "cx", "q": "India emissions", "num": 5}

    @pytest.mark.asyncio
    async def test_search_no_items(self):
        """Test a response without items yields an empty result list"""
        http_client = make_http_client(make_response({"searchInformation": {}}))
        client = GoogleSearchClient(api_key="key", cx="cx", client=http_client)

        payload = await client.search("nothing")

        assert payload["results"] == []

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        """Test missing key or engine id raises ConfigurationError without a request"""
        http_client = make_http_client()
        client = GoogleSearchClient(api_key="", cx="cx", client=http_client)

        with pytest.raises(ConfigurationError):
            await client.search("india")

        http_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_error_propagates_status(self):
        """Test provider error status and body are carried by UpstreamError"""
        request = httpx.Request("GET", SEARCH_URL)
        error_response = httpx.Response(403, json={"error": {"message": "quota"}}, request=request)
        response = MagicMock()
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("forbidden", request=request, response=error_response)
        )
        client = GoogleSearchClient(api_key="key", cx="cx", client=make_http_client(response))

        with pytest.raises(UpstreamError) as exc_info:
            await client.search("india")

        assert exc_info.value.status_code == 403
        assert exc_info.value.details == {"error": {"message": "quota"}}

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test a timeout surfaces as a 504 UpstreamError, not retried"""
        http_client = make_http_client(side_effect=httpx.ReadTimeout("timed out"))
        client = GoogleSearchClient(api_key="key", cx="cx", timeout=8.0, client=http_client)

        with pytest.raises(UpstreamError) as exc_info:
            await client.search("india")

        assert exc_info.value.status_code == 504
        assert http_client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_whole_request_deadline(self):
        """Test a request that stalls past the total timeout surfaces as 504"""
        async def stalled_get(*args, **kwargs):
            await asyncio.sleep(1)
            return make_response({"items": []})

        http_client = make_http_client()
        http_client.get = stalled_get
        client = GoogleSearchClient(api_key="key", cx="cx", timeout=0.05, client=http_client)

        with pytest.raises(UpstreamError) as exc_info:
            await client.search("india")

        assert exc_info.value.status_code == 504

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        """Test a 2xx body that is not JSON maps to a 502 carrying the body text"""
        response = make_response(None)
        response.json.side_effect = ValueError("Expecting value")
        response.text = "<html>maintenance</html>"
        client = GoogleSearchClient(api_key="key", cx="cx", client=make_http_client(response))

        with pytest.raises(UpstreamError) as exc_info:
            await client.search("india")

        assert exc_info.value.status_code == 502
        assert exc_info.value.details == "<html>maintenance</html>"

    @pytest.mark.asyncio
    async def test_json_not_an_object(self):
        response = make_response(["unexpected"])
        response.text = '["unexpected"]'
        client = GoogleSearchClient(api_key="key", cx="cx", client=make_http_client(response))

        with pytest.raises(UpstreamError) as exc_info:
            await client.search("india")

        assert exc_info.value.status_code == 502


class TestWebSearchService:
    """Tests for cache-fronted search"""

    def setup_method(self):
        """Setup test fixtures"""
        self.clock = FakeClock()
        self.cache = SearchCache(ttl=120, clock=self.clock)
        self.client = MagicMock(spec=GoogleSearchClient)
        self.client.search = AsyncMock(return_value={"results": [{"title": "t", "link": "l"}], "raw": {}})
        self.service = WebSearchService(self.client, self.cache)

    @pytest.mark.asyncio
    async def test_miss_then_hit(self):
        """Test second lookup within TTL is served from cache"""
        cached_first, payload_first = await self.service.search("india")
        cached_second, payload_second = await self.service.search("india")

        assert cached_first is False
        assert cached_second is True
        assert payload_first == payload_second
        assert self.client.search.await_count == 1

    @pytest.mark.asyncio
    async def test_expired_entry_refetched(self):
        """Test the provider is called again once the TTL has elapsed"""
        await self.service.search("india")
        self.clock.advance(120)

        cached, _ = await self.service.search("india")

        assert cached is False
        assert self.client.search.await_count == 2

    @pytest.mark.asyncio
    async def test_query_is_trimmed(self):
        await self.service.search("  india ")

        self.client.search.assert_awaited_once_with("india")
        assert self.cache.lookup("cse:india") is not None

    @pytest.mark.asyncio
    async def test_empty_query_rejected(self):
        with pytest.raises(ValidationError):
            await self.service.search("   ")

        self.client.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_not_cached(self):
        """Test upstream failures leave the cache untouched"""
        self.client.search.side_effect = UpstreamError("customsearch failed", status_code=500)

        with pytest.raises(UpstreamError):
            await self.service.search("india")

        assert len(self.cache) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
