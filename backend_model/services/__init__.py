"""Dataset services"""

from backend_model.services.emissions import EmissionsStore, MetaIndex
from backend_model.services.aggregation import SummaryAggregator

__all__ = [
    "EmissionsStore",
    "MetaIndex",
    "SummaryAggregator",
]
