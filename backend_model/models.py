"""
Domain models for the emissions dashboard

Records are immutable for the lifetime of the process; aggregated results
are computed on demand and never stored.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class EmissionRecord:
    """Emissions for one sector in one year, in MtCO₂e"""

    year: int
    sector: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __repr__(self):
        return f"<EmissionRecord(year={self.year}, sector={self.sector}, value={self.value})>"


@dataclass(frozen=True)
class SummaryResult:
    """Per-sector totals for a single year"""

    year: int
    by_sector: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return sum(self.by_sector.values())

    @property
    def is_empty(self) -> bool:
        return not self.by_sector


@dataclass(frozen=True)
class TrendPoint:
    """Grand total across all sectors for one year"""

    year: int
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
