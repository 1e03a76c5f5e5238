"""
Summary Aggregation Service

Sums emission values per sector for a year, and grand totals per year for
trend views. Results are recomputed on every call; the dataset is small and
static so they always agree with the store.
"""

from typing import Iterable, List, Optional, Tuple

from backend_model.config import settings
from backend_model.logger import logger
from backend_model.models import SummaryResult, TrendPoint
from backend_model.services.emissions import EmissionsStore, emissions_store


class SummaryAggregator:
    """
    Aggregates emission records with pandas.

    Sums are taken in sector-name order and rounded to a fixed precision so
    output is identical across runs regardless of dataset row order.
    """

    def __init__(self, store: EmissionsStore, precision: Optional[int] = None):
        self.store = store
        self.precision = settings.value_precision if precision is None else precision

    def summarize(self, year: int) -> SummaryResult:
        """
        Sum values per sector for one year.

        Args:
            year: Year to summarize

        Returns:
            SummaryResult; by_sector is empty when the year has no records
        """
        df = self.store.to_frame(year=year)
        if df.empty:
            logger.debug(f"No emission records for year {year}")
            return SummaryResult(year=year, by_sector={})

        grouped = df.groupby("sector", sort=True)["value"].sum()
        by_sector = {
            str(sector): round(float(value), self.precision)
            for sector, value in grouped.items()
        }
        return SummaryResult(year=year, by_sector=by_sector)

    def trend(self, years: Iterable[int]) -> List[TrendPoint]:
        """
        Grand total across all sectors for each requested year.

        Input order is preserved; years without records total 0.0.
        """
        points = []
        for year in years:
            # by_sector is already in sector-name order
            total = self.summarize(year).total
            points.append(TrendPoint(year=year, total=round(total, self.precision)))
        return points

    @staticmethod
    def rank(summary: SummaryResult) -> List[Tuple[str, float]]:
        """
        Sector totals ordered by value descending.

        Equal values are ordered by sector name.
        """
        return sorted(summary.by_sector.items(), key=lambda item: (-item[1], item[0]))


# Global aggregator over the built-in dataset
summary_aggregator = SummaryAggregator(emissions_store)
