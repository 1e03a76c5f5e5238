"""
Process-wide service instances for FastAPI dependency injection

Each getter lazily builds one instance that lives for the process lifetime.
Tests replace them through app.dependency_overrides.
"""

from typing import Optional

from backend_model.config import settings
from backend_model.services.aggregation import SummaryAggregator, summary_aggregator
from backend_model.services.emissions import EmissionsStore, MetaIndex, emissions_store, meta_index
from backend_api.services.rate_limiter import RateLimiter
from backend_api.services.search_cache import SearchCache
from backend_api.services.web_search import GoogleSearchClient, WebSearchService
from backend_api.services.ai.chatbot import EmissionsChatbotService
from backend_api.services.ai.intent_router import IntentRouter


_search_cache: Optional[SearchCache] = None
_rate_limiter: Optional[RateLimiter] = None
_search_client: Optional[GoogleSearchClient] = None
_search_service: Optional[WebSearchService] = None
_chatbot_service: Optional[EmissionsChatbotService] = None


def get_store() -> EmissionsStore:
    return emissions_store


def get_meta_index() -> MetaIndex:
    return meta_index


def get_aggregator() -> SummaryAggregator:
    return summary_aggregator


def get_search_cache() -> SearchCache:
    """Get global search cache instance"""
    global _search_cache

    if _search_cache is None:
        _search_cache = SearchCache(ttl=settings.search_cache_ttl)

    return _search_cache


def get_rate_limiter() -> RateLimiter:
    """Get global chat rate limiter instance"""
    global _rate_limiter

    if _rate_limiter is None:
        _rate_limiter = RateLimiter(min_interval=settings.rate_limit_interval)

    return _rate_limiter


def get_search_client() -> GoogleSearchClient:
    """Get global Custom Search client instance"""
    global _search_client

    if _search_client is None:
        _search_client = GoogleSearchClient()

    return _search_client


def get_search_service() -> WebSearchService:
    """Get global cached search service instance"""
    global _search_service

    if _search_service is None:
        _search_service = WebSearchService(get_search_client(), get_search_cache())

    return _search_service


def get_chatbot_service() -> EmissionsChatbotService:
    """Get global chatbot service instance"""
    global _chatbot_service

    if _chatbot_service is None:
        _chatbot_service = EmissionsChatbotService(
            rate_limiter=get_rate_limiter(),
            intent_router=IntentRouter(get_aggregator()),
            search_service=get_search_service(),
            result_limit=settings.search_result_limit,
        )

    return _chatbot_service


async def shutdown_services():
    """Release network resources held by the search client"""
    if _search_client is not None:
        await _search_client.close_client()
