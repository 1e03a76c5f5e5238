"""
FastAPI Application - Main Entry Point

Provides REST API for:
- Emissions dataset queries (meta, records, summaries, trends)
- Rule-based chat over the dataset
- Cached web search via Google Custom Search
- System health monitoring
"""

import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend_api import __version__
from backend_model.config import settings
from backend_model.logger import logger
from backend_model.services.emissions import EmissionsStore
from backend_api.dependencies import get_store, shutdown_services
from backend_api.routers import chat, emissions
from backend_api.schemas import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info(f"Starting Emissions Dashboard API v{__version__}")
    logger.info(f"Dataset loaded: {len(get_store())} records")

    if settings.search_configured:
        logger.info("Google Custom Search: SET")
    else:
        logger.warning("Google Custom Search: NOT SET (/api/search will return 500)")

    yield

    await shutdown_services()
    logger.info("Shutting down Emissions Dashboard API")


# API Tags for documentation organization
tags_metadata = [
    {
        "name": "Health",
        "description": "API health and status monitoring",
    },
    {
        "name": "Emissions",
        "description": "Sector emissions by year (MtCO₂e): meta, records, summaries and trends",
    },
    {
        "name": "AI Chat",
        "description": "Rule-based chat over the dataset, with optional web search",
    },
]

# Create FastAPI application
app = FastAPI(
    title="Emissions Dashboard API",
    description="""
## 🌍 Sector Emissions Dashboard Backend

- **Dataset**: Fixed in-memory sector emissions for 2010, 2015 and 2020
- **Summaries**: Per-sector totals and yearly grand totals
- **Chat**: Deterministic keyword rules (data → topical → default)
- **Web Search**: Google Custom Search with a 2 minute result cache

### 💬 Chat Rules

| Order | Trigger | Source |
|-------|---------|--------|
| 1 | year, sector, dashboard, highest, top | `local-data` |
| 2 | transport, energy, agriculture | `topical` |
| 3 | anything else | `topical` |
    """,
    version=__version__,
    lifespan=lifespan,
    openapi_tags=tags_metadata,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(emissions.router)
app.include_router(chat.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected faults without exposing details to the caller"""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}")
    logger.error(f"Traceback: {traceback.format_exc()}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ============== Health & Status ==============

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(store: EmissionsStore = Depends(get_store)):
    """Check API status and configuration"""
    return HealthResponse(
        status="healthy" if len(store) > 0 else "degraded",
        version=__version__,
        environment=settings.environment,
        records=len(store),
        search_configured=settings.search_configured,
    )


@app.get("/", tags=["Health"])
async def root():
    """API root with basic info"""
    return {
        "name": "Emissions Dashboard API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
