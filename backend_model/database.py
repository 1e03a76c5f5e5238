"""
In-memory emissions dataset

The dataset is loaded once at process start and never mutated. There is no
persistence; restarting the process reloads the same built-in rows.
"""

from typing import Iterable, List, Mapping, Any, Optional, Set, Tuple

from backend_model.exceptions import DatasetError
from backend_model.logger import logger
from backend_model.models import EmissionRecord


# Sector emissions in MtCO₂e
SAMPLE_EMISSIONS: Tuple[Mapping[str, Any], ...] = (
    {"year": 2010, "sector": "Energy", "value": 20.5},
    {"year": 2010, "sector": "Transport", "value": 7.3},
    {"year": 2010, "sector": "Industry", "value": 6.1},
    {"year": 2010, "sector": "Buildings", "value": 4.2},
    {"year": 2010, "sector": "Agriculture", "value": 5.0},
    {"year": 2010, "sector": "Waste", "value": 1.4},

    {"year": 2015, "sector": "Energy", "value": 22.0},
    {"year": 2015, "sector": "Transport", "value": 8.0},
    {"year": 2015, "sector": "Industry", "value": 6.8},
    {"year": 2015, "sector": "Buildings", "value": 4.5},
    {"year": 2015, "sector": "Agriculture", "value": 5.3},
    {"year": 2015, "sector": "Waste", "value": 1.6},

    {"year": 2020, "sector": "Energy", "value": 21.0},
    {"year": 2020, "sector": "Transport", "value": 7.8},
    {"year": 2020, "sector": "Industry", "value": 7.2},
    {"year": 2020, "sector": "Buildings", "value": 4.8},
    {"year": 2020, "sector": "Agriculture", "value": 5.5},
    {"year": 2020, "sector": "Waste", "value": 1.7},
)


def load_records(rows: Optional[Iterable[Mapping[str, Any]]] = None) -> List[EmissionRecord]:
    """
    Build validated emission records from raw rows.

    Args:
        rows: Mappings with year, sector and value keys (defaults to the built-in dataset)

    Returns:
        Records in input order

    Raises:
        DatasetError: on a negative value or a duplicate (year, sector) pair
    """
    if rows is None:
        rows = SAMPLE_EMISSIONS

    records: List[EmissionRecord] = []
    seen: Set[Tuple[int, str]] = set()

    for row in rows:
        try:
            record = EmissionRecord(
                year=int(row["year"]),
                sector=str(row["sector"]),
                value=float(row["value"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DatasetError(f"Malformed emissions row {dict(row)}: {e}") from e

        if record.value < 0:
            raise DatasetError(f"Negative emission value for {record.sector} in {record.year}")

        key = (record.year, record.sector)
        if key in seen:
            raise DatasetError(f"Duplicate record for {record.sector} in {record.year}")
        seen.add(key)
        records.append(record)

    logger.debug(f"Loaded {len(records)} emission records")
    return records
