"""Derived ratio metrics with zero-defaulting denominators."""

from __future__ import annotations

import math

import polars as pl

from campaign_dashboard.domain.models import Counters, RatioMetrics


def safe_ratio(num: float, den: float) -> float:
    if den <= 0:
        return 0.0
    value = num / den
    if not math.isfinite(value):
        return 0.0
    return value


def ctr(counters: Counters) -> float:
    return safe_ratio(counters.clicks, counters.impressions)


def conversion_rate(counters: Counters) -> float:
    return safe_ratio(counters.conversions, counters.clicks)


def cpc(counters: Counters) -> float:
    return safe_ratio(counters.spend, counters.clicks)


def cpa(counters: Counters) -> float:
    return safe_ratio(counters.spend, counters.conversions)


def roas(counters: Counters) -> float:
    return safe_ratio(counters.revenue, counters.spend)


def derive_ratios(counters: Counters) -> RatioMetrics:
    """Recompute every ratio from summed counters; ratios are never added."""
    return RatioMetrics(
        ctr=ctr(counters),
        conversion_rate=conversion_rate(counters),
        cpc=cpc(counters),
        cpa=cpa(counters),
        roas=roas(counters),
    )


def safe_ratio_expr(num: pl.Expr, den: pl.Expr) -> pl.Expr:
    safe_den = pl.when(den > 0).then(den).otherwise(None)
    return (num / safe_den).fill_null(0.0).fill_nan(0.0)


def ratio_exprs() -> list[pl.Expr]:
    return [
        safe_ratio_expr(pl.col("clicks"), pl.col("impressions")).alias("ctr"),
        safe_ratio_expr(pl.col("conversions"), pl.col("clicks")).alias("conversion_rate"),
        safe_ratio_expr(pl.col("spend"), pl.col("clicks")).alias("cpc"),
        safe_ratio_expr(pl.col("spend"), pl.col("conversions")).alias("cpa"),
        safe_ratio_expr(pl.col("revenue"), pl.col("spend")).alias("roas"),
    ]
