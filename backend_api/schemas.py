"""
Pydantic schemas for API request/response validation
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# Dataset Schemas
class MetaResponse(BaseModel):
    """Distinct years and sectors available in the dataset"""
    years: List[int]
    sectors: List[str]


class EmissionRecordResponse(BaseModel):
    """Single emission record"""
    year: int
    sector: str
    value: float

    class Config:
        from_attributes = True


class SummaryResponse(BaseModel):
    """Per-sector totals for a year"""
    year: int
    summary: Dict[str, float]


class TrendPointResponse(BaseModel):
    """Grand total across sectors for a year"""
    year: int
    total: float

    class Config:
        from_attributes = True


# Search Schemas
class SearchResponse(BaseModel):
    """Custom Search results, flagged when served from cache"""
    cached: bool = False
    results: List[Dict[str, Any]] = Field(default_factory=list)
    raw: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error body for search failures"""
    error: str
    details: Optional[Any] = None


# AI Chat Schemas
class ChatRequest(BaseModel):
    """Chat message from the dashboard"""
    message: Optional[str] = Field(default="", description="Free-text question")
    internet: bool = Field(default=False, description="Answer from web search instead of local data")


class ChatResponse(BaseModel):
    """Response from the chat endpoint"""
    answer: str
    source: str  # local-data | topical | web | rate-limited | error


# Health Check Response
class HealthResponse(BaseModel):
    """API health check response"""
    status: str
    version: str
    environment: str
    records: int
    search_configured: bool
