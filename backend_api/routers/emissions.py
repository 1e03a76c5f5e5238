"""
Emissions Data Router

Read-only endpoints backing the dashboard's selectors, bar chart,
summary cards and trend line.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from backend_model.config import settings
from backend_model.services.aggregation import SummaryAggregator
from backend_model.services.emissions import EmissionsStore, MetaIndex
from backend_api.dependencies import get_aggregator, get_meta_index, get_store
from backend_api.schemas import (
    EmissionRecordResponse, MetaResponse, SummaryResponse, TrendPointResponse
)

router = APIRouter(prefix="/api", tags=["Emissions"])

ALL_SECTORS = "All"


def parse_year(raw: Optional[str]) -> Optional[int]:
    """Integer year from a query string value, or None if absent or not a number"""
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


@router.get("/meta", response_model=MetaResponse)
async def get_meta(meta: MetaIndex = Depends(get_meta_index)):
    """Distinct years (ascending) and sectors (sorted)"""
    return MetaResponse(years=meta.years(), sectors=meta.sectors())


@router.get("/emissions", response_model=List[EmissionRecordResponse])
async def get_emissions(
    year: Optional[str] = Query(default=None, description="Filter by year"),
    sector: Optional[str] = Query(default=None, description="Filter by sector ('All' for every sector)"),
    store: EmissionsStore = Depends(get_store),
):
    """
    Emission records matching the filters, in dataset order.

    A year that is not a number matches nothing.
    """
    year_filter = parse_year(year)
    if year is not None and year.strip() and year_filter is None:
        return []

    sector_filter = sector if sector and sector != ALL_SECTORS else None
    return [r.to_dict() for r in store.query(year=year_filter, sector=sector_filter)]


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    year: Optional[str] = Query(default=None, description="Year to summarize (default 2020)"),
    aggregator: SummaryAggregator = Depends(get_aggregator),
):
    """Per-sector totals for a year; absent or invalid year falls back to the default"""
    year_value = parse_year(year) or settings.default_year
    result = aggregator.summarize(year_value)
    return SummaryResponse(year=result.year, summary=result.by_sector)


@router.get("/trend", response_model=List[TrendPointResponse])
async def get_trend(
    years: Optional[str] = Query(default=None, description="Comma-separated years (default: all)"),
    aggregator: SummaryAggregator = Depends(get_aggregator),
    meta: MetaIndex = Depends(get_meta_index),
):
    """Grand total per year, in the requested order"""
    if years:
        requested = [y for y in (parse_year(part) for part in years.split(",")) if y is not None]
    else:
        requested = meta.years()
    return [point.to_dict() for point in aggregator.trend(requested)]
