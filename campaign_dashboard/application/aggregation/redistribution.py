"""Weighted redistribution of campaign spend/revenue across sub-buckets.

Demographic breakdowns report impressions, clicks and conversions but no
money. Their spend and revenue are apportioned from the parent campaign:

* age-group and age x gender buckets use impression share against the
  campaign's own impressions total;
* male/female totals use click share against the combined male and female
  clicks of the same campaign.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, Mapping, Sequence

from campaign_dashboard.application.aggregation.metrics import safe_ratio
from campaign_dashboard.domain.models import Campaign, MergedBucket


GENDER_SPLIT: tuple[str, ...] = ("male", "female")


@dataclass(frozen=True)
class Allocation:
    weight: float
    spend: float
    revenue: float


@dataclass(frozen=True)
class GenderTotals:
    clicks: float = 0.0
    spend: float = 0.0
    revenue: float = 0.0

    def __add__(self, other: "GenderTotals") -> "GenderTotals":
        return GenderTotals(
            clicks=self.clicks + other.clicks,
            spend=self.spend + other.spend,
            revenue=self.revenue + other.revenue,
        )

    def is_finite(self) -> bool:
        return all(math.isfinite(value) for value in (self.clicks, self.spend, self.revenue))


def weight_share(part: float, reference_total: float) -> float:
    share = safe_ratio(part, reference_total)
    return min(max(share, 0.0), 1.0)


def redistribute(
    spend: float,
    revenue: float,
    reference_total: float,
    parts: Sequence[float],
) -> list[Allocation]:
    """Split ``spend``/``revenue`` over ``parts`` by their share of ``reference_total``."""
    reference = reference_total
    if reference > 0:
        reference = max(reference, sum(parts))
    allocations: list[Allocation] = []
    for part in parts:
        weight = weight_share(part, reference)
        allocations.append(Allocation(weight=weight, spend=spend * weight, revenue=revenue * weight))
    return allocations


def demographic_allocations(campaign: Campaign) -> list[Allocation]:
    """Impression-share allocation, one entry per demographic breakdown record."""
    return redistribute(
        campaign.counters.spend,
        campaign.counters.revenue,
        campaign.counters.impressions,
        [demo.counters.impressions for demo in campaign.demographic_breakdown],
    )


def gender_split(campaign: Campaign) -> dict[str, GenderTotals]:
    clicks_by_gender = {gender: 0.0 for gender in GENDER_SPLIT}
    for demo in campaign.demographic_breakdown:
        if demo.gender in clicks_by_gender:
            clicks_by_gender[demo.gender] += demo.counters.clicks

    total_clicks = sum(clicks_by_gender.values())
    allocations = redistribute(
        campaign.counters.spend,
        campaign.counters.revenue,
        total_clicks,
        [clicks_by_gender[gender] for gender in GENDER_SPLIT],
    )
    return {
        gender: GenderTotals(clicks=clicks_by_gender[gender], spend=allocation.spend, revenue=allocation.revenue)
        for gender, allocation in zip(GENDER_SPLIT, allocations)
    }


def traffic_shares(buckets: Mapping[Hashable, MergedBucket]) -> dict[Hashable, float]:
    total = sum(bucket.counters.impressions for bucket in buckets.values())
    return {key: weight_share(bucket.counters.impressions, total) for key, bucket in buckets.items()}
