"""Application service: raw campaigns -> merged buckets -> dashboard views."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

import polars as pl

from campaign_dashboard.application.aggregation import views
from campaign_dashboard.application.aggregation.frames import buckets_frame
from campaign_dashboard.application.aggregation.redistribution import traffic_shares
from campaign_dashboard.application.aggregation.reducer import (
    BucketKey,
    campaign_rows,
    demographic_rows,
    gender_totals,
    key_fields_for,
    reduce_dimension,
)
from campaign_dashboard.application.aggregation.selectors import SortSpec, filter_campaigns, rank_records
from campaign_dashboard.domain.models import Campaign, MergedBucket, SkippedRecord
from campaign_dashboard.ingestion import parse_campaigns, parse_document, require_campaign_list


logger = logging.getLogger(__name__)

DASHBOARD_DIMENSIONS: tuple[str, ...] = ("demographic", "demographic_gender", "device", "region", "week")


@dataclass(frozen=True)
class DashboardOptions:
    name_query: str = ""
    categories: FrozenSet[str] = frozenset()
    category_field: str = "objective"
    top_n: Optional[int] = None


@dataclass(frozen=True)
class AggregationResult:
    dimension: str
    buckets: Dict[BucketKey, MergedBucket]
    skipped: tuple[SkippedRecord, ...] = ()

    def records(self) -> List[Dict[str, Any]]:
        return [bucket.as_record() for bucket in self.buckets.values()]

    def ranked(self, sort: SortSpec, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return rank_records(self.records(), sort, limit=limit)

    def to_frame(self) -> pl.DataFrame:
        return buckets_frame(self.buckets, key_fields_for(self.dimension))


@dataclass(frozen=True)
class DashboardResult:
    campaigns: List[Dict[str, str]]
    demographic: Dict[str, Any]
    device: Dict[str, Any]
    region: Dict[str, Any]
    weekly: Dict[str, Any]
    aggregations: Dict[str, AggregationResult]
    filtered_campaigns: tuple[Campaign, ...]
    skipped: tuple[SkippedRecord, ...] = field(default_factory=tuple)

    def to_summary(self) -> Dict[str, Any]:
        """JSON-ready payload for rendering collaborators."""
        return {
            "campaigns": self.campaigns,
            "demographic": _plain(self.demographic),
            "device": _plain(self.device),
            "region": _plain(self.region),
            "weekly": _plain(self.weekly),
            "skipped": [record.as_dict() for record in self.skipped],
        }


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if hasattr(value, "__dataclass_fields__"):
        return asdict(value)
    return value


def _select(campaigns: Sequence[Campaign], options: DashboardOptions) -> List[Campaign]:
    return filter_campaigns(
        campaigns,
        name_query=options.name_query,
        categories=options.categories,
        category_field=options.category_field,
    )


def aggregate(
    raw_campaigns: Sequence[Any],
    dimension: str,
    options: Optional[DashboardOptions] = None,
) -> AggregationResult:
    """Pure fold of ``raw_campaigns`` along ``dimension``; no state survives the call."""
    key_fields_for(dimension)
    opts = options or DashboardOptions()
    parsed = parse_campaigns(require_campaign_list(raw_campaigns))
    selected = _select(parsed.campaigns, opts)
    return AggregationResult(dimension=dimension, buckets=reduce_dimension(selected, dimension), skipped=parsed.skipped)


def _demographic_view(results: Dict[str, AggregationResult], campaigns: Sequence[Campaign], top_n: Optional[int]) -> Dict[str, Any]:
    by_age = results["demographic"]
    spend_rows = by_age.ranked(SortSpec("spend"), limit=top_n)
    revenue_rows = by_age.ranked(SortSpec("revenue"), limit=top_n)
    by_age_gender = results["demographic_gender"].ranked(SortSpec("revenue"), limit=top_n)
    impressions_desc = SortSpec("impressions")
    return {
        "spend_by_age": views.bar_series(spend_rows, "spend", views.SPEND_COLOR, label_field="age_group"),
        "revenue_by_age": views.bar_series(revenue_rows, "revenue", views.REVENUE_COLOR, label_field="age_group"),
        "revenue_heat_map": views.heat_cells(by_age_gender, "revenue"),
        "gender_cards": views.gender_cards(gender_totals(campaigns)),
        "male_table": views.demographic_table(rank_records(demographic_rows(campaigns, "male"), impressions_desc)),
        "female_table": views.demographic_table(rank_records(demographic_rows(campaigns, "female"), impressions_desc)),
    }


def _device_view(result: AggregationResult) -> Dict[str, Any]:
    shares = {key[0]: share for key, share in traffic_shares(result.buckets).items()}
    records = result.ranked(SortSpec("impressions"))
    return {
        "cards": views.device_cards(records, shares),
        "bars": views.device_bars(records),
    }


def _region_view(result: AggregationResult, top_n: Optional[int]) -> Dict[str, Any]:
    return {
        "scatter": views.region_scatter(result.ranked(SortSpec("impressions"))),
        "revenue_heat_map": views.heat_cells(result.ranked(SortSpec("revenue"), limit=top_n), "revenue", label_field="region"),
    }


def _weekly_view(result: AggregationResult) -> Dict[str, Any]:
    return {"lines": views.weekly_lines(result.ranked(SortSpec("week_start", "asc")))}


def build_dashboard(document: Any, options: Optional[DashboardOptions] = None) -> DashboardResult:
    opts = options or DashboardOptions()
    parsed = parse_document(document)
    selected = _select(parsed.campaigns, opts)
    logger.info(
        "Building dashboard for %d of %d campaign(s) (%d skipped record(s))",
        len(selected),
        len(parsed.campaigns),
        len(parsed.skipped),
    )

    results = {
        dimension: AggregationResult(dimension, reduce_dimension(selected, dimension), parsed.skipped)
        for dimension in DASHBOARD_DIMENSIONS
    }
    campaign_records = rank_records(campaign_rows(selected), SortSpec("revenue"), limit=opts.top_n)
    return DashboardResult(
        campaigns=views.campaign_table(campaign_records),
        demographic=_demographic_view(results, selected, opts.top_n),
        device=_device_view(results["device"]),
        region=_region_view(results["region"], opts.top_n),
        weekly=_weekly_view(results["week"]),
        aggregations=results,
        filtered_campaigns=tuple(selected),
        skipped=parsed.skipped,
    )
