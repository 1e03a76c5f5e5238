"""
Emissions Chatbot Service

Main service that orchestrates:
1. Rate limiting per client
2. Local answers via the rule-based IntentRouter
3. Web answers via the cached search service (when internet search is requested)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from backend_model.exceptions import RateLimitedError
from backend_model.logger import logger
from backend_api.services.rate_limiter import RateLimiter
from backend_api.services.web_search import WebSearchService
from .intent_router import IntentRouter


SOURCE_WEB = "web"
SOURCE_RATE_LIMITED = "rate-limited"
SOURCE_ERROR = "error"

RATE_LIMIT_MESSAGE = "Too many requests - slow down a bit."
NO_WEB_RESULTS_MESSAGE = "No web results found."


@dataclass(frozen=True)
class ChatAnswer:
    text: str
    source: str


def format_web_results(items: List[Dict[str, Any]], limit: int = 5) -> str:
    """
    Numbered list of result titles and links.

    Args:
        items: Custom Search result items
        limit: Maximum number of results to list

    Returns:
        Formatted answer text
    """
    items = items[:limit]
    if not items:
        return NO_WEB_RESULTS_MESSAGE

    lines = [
        f"{i}. {item.get('title', '(untitled)')}\n{item.get('link', '')}"
        for i, item in enumerate(items, start=1)
    ]
    return "Top web results:\n\n" + "\n\n".join(lines)


class EmissionsChatbotService:
    """
    Chat front door for the dashboard.

    Internet requests bypass the IntentRouter entirely and go to the
    cached web search; everything else is answered locally.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        intent_router: IntentRouter,
        search_service: Optional[WebSearchService] = None,
        result_limit: int = 5,
    ):
        self.rate_limiter = rate_limiter
        self.intent_router = intent_router
        self.search_service = search_service
        self.result_limit = result_limit

    async def answer(self, message: Optional[str], client_id: str, internet: bool = False) -> ChatAnswer:
        """
        Process a chat message end-to-end.

        Args:
            message: Raw chat text
            client_id: Caller identity used for rate limiting
            internet: Answer from web search instead of local rules

        Returns:
            ChatAnswer

        Raises:
            RateLimitedError: client sent another request too soon
            ConfigurationError, UpstreamError: web search failed
        """
        decision = self.rate_limiter.admit(client_id)
        if not decision.accepted:
            raise RateLimitedError(RATE_LIMIT_MESSAGE, retry_after=decision.retry_after)

        logger.info(f"Processing chat from {client_id} (internet={internet}): {(message or '')[:100]}")

        if internet:
            return await self._answer_from_web(message or "")

        routed = self.intent_router.route(message)
        return ChatAnswer(text=routed.text, source=routed.source)

    async def _answer_from_web(self, message: str) -> ChatAnswer:
        if self.search_service is None:
            logger.warning("Internet chat requested but no search service is wired")
            return ChatAnswer(text=NO_WEB_RESULTS_MESSAGE, source=SOURCE_WEB)

        cached, payload = await self.search_service.search(message)
        items = payload.get("results") or []
        logger.debug(f"Web answer from {'cache' if cached else 'provider'} with {len(items)} items")
        return ChatAnswer(text=format_web_results(items, self.result_limit), source=SOURCE_WEB)
