"""Services package for the emissions API"""

from backend_api.services.search_cache import SearchCache, CacheEntry
from backend_api.services.rate_limiter import RateLimiter, RateLimitDecision
from backend_api.services.web_search import GoogleSearchClient, WebSearchService

__all__ = [
    "SearchCache",
    "CacheEntry",
    "RateLimiter",
    "RateLimitDecision",
    "GoogleSearchClient",
    "WebSearchService",
]
