"""Domain layer package."""

from .errors import DashboardError, DataSourceError, MalformedRecordError, MissingInputError, UnknownDimensionError
from .models import Campaign, Counters, MergedBucket, RatioMetrics, SkippedRecord

__all__ = [
    "Campaign",
    "Counters",
    "MergedBucket",
    "RatioMetrics",
    "SkippedRecord",
    "DashboardError",
    "DataSourceError",
    "MalformedRecordError",
    "MissingInputError",
    "UnknownDimensionError",
]
