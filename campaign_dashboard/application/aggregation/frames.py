"""Polars frames for tabular export of merged buckets and campaigns."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

import polars as pl

from campaign_dashboard.application.aggregation.metrics import ratio_exprs
from campaign_dashboard.domain.models import COUNTER_FIELDS, RATIO_FIELDS, Campaign, MergedBucket


CAMPAIGN_COLUMNS: List[str] = ["id", "name", "objective", *COUNTER_FIELDS, *RATIO_FIELDS]


def buckets_frame(buckets: Mapping[Any, MergedBucket], key_fields: Sequence[str]) -> pl.DataFrame:
    columns = [*key_fields, *COUNTER_FIELDS, *RATIO_FIELDS, "contributions"]
    if not buckets:
        return pl.DataFrame({col: [] for col in columns})
    rows = [bucket.as_record() for bucket in buckets.values()]
    return pl.DataFrame(rows).select(columns).sort(list(key_fields))


def campaign_frame(campaigns: Sequence[Campaign]) -> pl.DataFrame:
    if not campaigns:
        return pl.DataFrame({col: [] for col in CAMPAIGN_COLUMNS})
    rows: List[Dict[str, Any]] = []
    for campaign in campaigns:
        row: Dict[str, Any] = {"id": campaign.id, "name": campaign.name, "objective": campaign.objective}
        row.update(campaign.counters.as_dict())
        rows.append(row)
    schema = {"id": pl.Utf8, "name": pl.Utf8, "objective": pl.Utf8, **{name: pl.Float64 for name in COUNTER_FIELDS}}
    return pl.DataFrame(rows, schema=schema).with_columns(ratio_exprs()).select(CAMPAIGN_COLUMNS)
