"""Grouping/merge reducer folding breakdown records into keyed buckets."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Sequence, Tuple

from campaign_dashboard.application.aggregation.metrics import derive_ratios
from campaign_dashboard.application.aggregation.redistribution import (
    GENDER_SPLIT,
    GenderTotals,
    demographic_allocations,
    gender_split,
)
from campaign_dashboard.domain.errors import MalformedRecordError, UnknownDimensionError
from campaign_dashboard.domain.models import Campaign, Counters, MergedBucket


logger = logging.getLogger(__name__)

BucketKey = Tuple[str, ...]
Contribution = Tuple[BucketKey, Counters]

DIMENSION_KEYS: Dict[str, Tuple[str, ...]] = {
    "demographic": ("age_group",),
    "demographic_gender": ("age_group", "gender"),
    "device": ("device",),
    "region": ("region",),
    "week": ("week_start", "week_end"),
}


def _demographic_contributions(campaign: Campaign, with_gender: bool) -> Iterator[Contribution]:
    allocations = demographic_allocations(campaign)
    for demo, allocation in zip(campaign.demographic_breakdown, allocations):
        key = (demo.age_group, demo.gender) if with_gender else (demo.age_group,)
        yield key, demo.counters.with_money(allocation.spend, allocation.revenue)


def _device_contributions(campaign: Campaign) -> Iterator[Contribution]:
    for record in campaign.device_performance:
        yield (record.device,), record.counters


def _region_contributions(campaign: Campaign) -> Iterator[Contribution]:
    for record in campaign.regional_performance:
        yield (record.region,), record.counters


def _week_contributions(campaign: Campaign) -> Iterator[Contribution]:
    for record in campaign.weekly_performance:
        yield (record.week_start, record.week_end), record.counters


CONTRIBUTORS: Dict[str, Callable[[Campaign], Iterator[Contribution]]] = {
    "demographic": lambda campaign: _demographic_contributions(campaign, with_gender=False),
    "demographic_gender": lambda campaign: _demographic_contributions(campaign, with_gender=True),
    "device": _device_contributions,
    "region": _region_contributions,
    "week": _week_contributions,
}


def key_fields_for(dimension: str) -> Tuple[str, ...]:
    try:
        return DIMENSION_KEYS[dimension]
    except KeyError:
        raise UnknownDimensionError(f"Unknown dimension '{dimension}', expected one of {sorted(DIMENSION_KEYS)}") from None


def seed_bucket(dimension: str, key: BucketKey, counters: Counters) -> MergedBucket:
    fresh = Counters() + counters
    return MergedBucket(
        dimension=dimension,
        key_fields=key_fields_for(dimension),
        key=tuple(key),
        counters=fresh,
        ratios=derive_ratios(fresh),
    )


def merge_bucket(bucket: MergedBucket, counters: Counters) -> MergedBucket:
    summed = bucket.counters + counters
    return MergedBucket(
        dimension=bucket.dimension,
        key_fields=bucket.key_fields,
        key=bucket.key,
        counters=summed,
        ratios=derive_ratios(summed),
        contributions=bucket.contributions + 1,
    )


def fold_contributions(dimension: str, contributions: Iterator[Contribution]) -> Dict[BucketKey, MergedBucket]:
    buckets: Dict[BucketKey, MergedBucket] = {}
    for key, counters in contributions:
        existing = buckets.get(key)
        if existing is None:
            buckets[key] = seed_bucket(dimension, key, counters)
        else:
            try:
                buckets[key] = merge_bucket(existing, counters)
            except MalformedRecordError as exc:
                logger.warning("Dropped %s contribution to %s: %s", dimension, " / ".join(key), exc)
    return buckets


def reduce_dimension(campaigns: Sequence[Campaign], dimension: str) -> Dict[BucketKey, MergedBucket]:
    """Fold every campaign's breakdowns for ``dimension`` into a fresh key -> bucket table."""
    key_fields_for(dimension)
    contributor = CONTRIBUTORS[dimension]

    def _all() -> Iterator[Contribution]:
        for campaign in campaigns:
            yield from contributor(campaign)

    buckets = fold_contributions(dimension, _all())
    logger.debug("Reduced %d campaigns into %d %s buckets", len(campaigns), len(buckets), dimension)
    return buckets


def gender_totals(campaigns: Sequence[Campaign]) -> Dict[str, GenderTotals]:
    totals = {gender: GenderTotals() for gender in GENDER_SPLIT}
    for campaign in campaigns:
        for gender, share in gender_split(campaign).items():
            summed = totals[gender] + share
            if not summed.is_finite():
                logger.warning("Dropped %s totals of campaign %s: sum overflows", gender, campaign.name)
                continue
            totals[gender] = summed
    return totals


def demographic_rows(campaigns: Sequence[Campaign], gender: str) -> List[Dict[str, Any]]:
    target = gender.strip().lower()
    rows: List[Dict[str, Any]] = []
    for campaign in campaigns:
        for demo in campaign.demographic_breakdown:
            if demo.gender != target:
                continue
            ratios = derive_ratios(demo.counters)
            rows.append(
                {
                    "campaign": campaign.name,
                    "age_group": demo.age_group,
                    "impressions": demo.counters.impressions,
                    "clicks": demo.counters.clicks,
                    "conversions": demo.counters.conversions,
                    "ctr": ratios.ctr,
                    "conversion_rate": ratios.conversion_rate,
                }
            )
    return rows


def campaign_rows(campaigns: Sequence[Campaign]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for campaign in campaigns:
        row: Dict[str, Any] = {"id": campaign.id, "name": campaign.name, "objective": campaign.objective}
        row.update(campaign.counters.as_dict())
        row.update(derive_ratios(campaign.counters).as_dict())
        rows.append(row)
    return rows
