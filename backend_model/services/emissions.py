"""
Emissions Store and Meta Index

Read-only accessors over the in-memory emissions dataset:
- Filtered record queries (year and/or sector)
- Distinct years and sectors for dashboard selectors
"""

from typing import Iterable, List, Optional

import pandas as pd

from backend_model.database import load_records
from backend_model.models import EmissionRecord


class EmissionsStore:
    """
    Immutable-for-process collection of emission records.

    Filters never fail: an unmatched year or sector yields an empty list.
    """

    COLUMNS = ["year", "sector", "value"]

    def __init__(self, records: Optional[Iterable[EmissionRecord]] = None):
        if records is None:
            records = load_records()
        self._records = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def query(self, year: Optional[int] = None, sector: Optional[str] = None) -> List[EmissionRecord]:
        """
        Return records matching the given filters, preserving dataset order.

        Args:
            year: Only records for this year (None means any year)
            sector: Only records for this sector (None means any sector)

        Returns:
            Matching records
        """
        return [
            r for r in self._records
            if (year is None or r.year == year)
            and (sector is None or r.sector == sector)
        ]

    def to_frame(self, year: Optional[int] = None) -> pd.DataFrame:
        """Records as a DataFrame with year, sector and value columns"""
        rows = [r.to_dict() for r in self.query(year=year)]
        return pd.DataFrame(rows, columns=self.COLUMNS)


class MetaIndex:
    """Distinct years and sectors derived from an EmissionsStore"""

    def __init__(self, store: EmissionsStore):
        # Dataset is immutable, so both lists are computed once
        self._years = sorted({r.year for r in store})
        self._sectors = sorted({r.sector for r in store})

    def years(self) -> List[int]:
        """Distinct years, ascending"""
        return list(self._years)

    def sectors(self) -> List[str]:
        """Distinct sectors, lexicographically sorted"""
        return list(self._sectors)


# Global instances built from the built-in dataset
emissions_store = EmissionsStore()
meta_index = MetaIndex(emissions_store)
