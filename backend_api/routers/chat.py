"""
Chat and Web Search Router

POST /api/chat answers dashboard questions (rate limited per client).
GET /api/search proxies Google Custom Search through the result cache.
"""

import traceback
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from backend_model.exceptions import (
    ConfigurationError, RateLimitedError, UpstreamError, ValidationError
)
from backend_model.logger import logger
from backend_api.dependencies import get_chatbot_service, get_search_service
from backend_api.schemas import ChatRequest, ChatResponse, ErrorResponse, SearchResponse
from backend_api.services.ai.chatbot import (
    SOURCE_ERROR, SOURCE_RATE_LIMITED, EmissionsChatbotService
)
from backend_api.services.web_search import WebSearchService

router = APIRouter(prefix="/api", tags=["AI Chat"])

CHAT_ERROR_MESSAGE = "Server error in chat handler."
WEB_ERROR_MESSAGE = "Web search is unavailable right now. Please try again later."


def client_identity(request: Request) -> str:
    """Origin address of the caller"""
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={429: {"model": ChatResponse}, 500: {"model": ChatResponse}},
)
async def chat(
    body: ChatRequest,
    request: Request,
    chatbot: EmissionsChatbotService = Depends(get_chatbot_service),
):
    """
    Answer a dashboard question.

    **Examples:**
    - "Which sector is highest in 2020?" (answered from local data)
    - "Tell me about transport" (topical explanation)
    - any text with `internet: true` (top web results)
    """
    try:
        result = await chatbot.answer(body.message, client_identity(request), internet=body.internet)
        return ChatResponse(answer=result.text, source=result.source)
    except RateLimitedError as e:
        return JSONResponse(
            status_code=429,
            content=ChatResponse(answer=e.message, source=SOURCE_RATE_LIMITED).model_dump(),
            headers={"Retry-After": str(max(1, round(e.retry_after)))},
        )
    except ValidationError as e:
        return JSONResponse(
            status_code=e.status_code,
            content=ChatResponse(answer=e.message, source=SOURCE_ERROR).model_dump(),
        )
    except (ConfigurationError, UpstreamError) as e:
        logger.error(f"Chat web search failed: {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content=ChatResponse(answer=WEB_ERROR_MESSAGE, source=SOURCE_ERROR).model_dump(),
        )
    except Exception as e:
        logger.error(f"Chat error: {e}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        return JSONResponse(
            status_code=500,
            content=ChatResponse(answer=CHAT_ERROR_MESSAGE, source=SOURCE_ERROR).model_dump(),
        )


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(
    q: Optional[str] = Query(default=None, description="Search text"),
    search_service: WebSearchService = Depends(get_search_service),
):
    """
    Google Custom Search results (top 5), cached per query for two minutes.
    """
    try:
        cached, payload = await search_service.search(q or "")
        return SearchResponse(cached=cached, **payload)
    except ValidationError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except ConfigurationError as e:
        logger.error(f"Search misconfigured: {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except UpstreamError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message, "details": e.details},
        )
    except Exception as e:
        logger.error(f"Search error: {e}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        return JSONResponse(status_code=500, content={"error": "customsearch failed"})
