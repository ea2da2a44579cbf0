"""Campaign dashboard aggregation engine."""

from .application import AggregationResult, DashboardOptions, DashboardResult, aggregate, build_dashboard
from .application.aggregation.selectors import SortSpec, filter_records, rank_records
from .ingestion import parse_campaigns, parse_document

__all__ = [
    "AggregationResult",
    "DashboardOptions",
    "DashboardResult",
    "SortSpec",
    "aggregate",
    "build_dashboard",
    "filter_records",
    "rank_records",
    "parse_campaigns",
    "parse_document",
]
