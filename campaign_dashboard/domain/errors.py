"""Exception taxonomy for the aggregation engine."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for every error raised by campaign_dashboard."""


class MalformedRecordError(DashboardError, ValueError):
    """A campaign or breakdown record is structurally unusable."""


class MissingInputError(DashboardError, ValueError):
    """The engine was asked to run against an absent document."""


class UnknownDimensionError(DashboardError, KeyError):
    """Requested dimension has no reducer key definition."""


class DataSourceError(DashboardError):
    """The marketing document could not be loaded or parsed."""
