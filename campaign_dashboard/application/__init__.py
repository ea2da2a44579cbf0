"""Application layer package."""

from .dashboard_service import AggregationResult, DashboardOptions, DashboardResult, aggregate, build_dashboard

__all__ = ["AggregationResult", "DashboardOptions", "DashboardResult", "aggregate", "build_dashboard"]
