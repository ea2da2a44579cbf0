"""View assembly: reshape ranked records into chart/table primitives."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from campaign_dashboard.application.aggregation.formatting import (
    fmt_money,
    fmt_number,
    fmt_pct,
    fmt_week_label,
)
from campaign_dashboard.application.aggregation.redistribution import GenderTotals


SPEND_COLOR = "#10B981"
REVENUE_COLOR = "#3B82F6"
DEVICE_ORDER: tuple[str, ...] = ("Mobile", "Desktop", "Tablet")
DEVICE_COLORS: Dict[str, tuple[str, str, str]] = {
    "Mobile": ("#38bdf8", "#0ea5e9", "#0369a1"),
    "Desktop": ("#fbbf24", "#f59e42", "#b45309"),
    "Tablet": ("#a78bfa", "#c4b5fd", "#7c3aed"),
}
REGION_COORDINATES: Dict[str, tuple[float, float]] = {
    "Abu Dhabi": (80.0, 70.0),
    "Dubai": (100.0, 80.0),
    "Sharjah": (90.0, 85.0),
    "Riyadh": (120.0, 60.0),
    "Doha": (130.0, 90.0),
    "Kuwait City": (140.0, 75.0),
    "Manama": (150.0, 95.0),
}
COORDINATE_SPAN = 200.0
MISSING = "-"


@dataclass(frozen=True)
class BarDatum:
    label: str
    value: float
    color: str


@dataclass(frozen=True)
class ScatterPoint:
    label: str
    x: float
    y: float
    size: float
    tooltip: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LinePoint:
    week: str
    revenue: float
    spend: float


@dataclass(frozen=True)
class HeatCell:
    id: str
    label: str
    value: float
    intensity: float
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MetricCard:
    title: str
    value: str


@dataclass(frozen=True)
class DeviceCard:
    device: str
    impressions: str
    clicks: str
    conversions: str
    spend: str
    revenue: str
    ctr: str
    conversion_rate: str
    traffic_share: str


def bar_series(
    records: Sequence[Mapping[str, Any]],
    value_field: str,
    color: str,
    label_field: str = "label",
) -> List[BarDatum]:
    return [BarDatum(label=str(row.get(label_field, "")), value=float(row.get(value_field) or 0.0), color=color) for row in records]


def fallback_coordinates(region: str) -> tuple[float, float]:
    """Stable pseudo-position for regions missing from the coordinate table."""
    digest = hashlib.sha1(region.encode("utf-8")).digest()
    x = int.from_bytes(digest[:4], "big") / 0xFFFFFFFF * COORDINATE_SPAN
    y = int.from_bytes(digest[4:8], "big") / 0xFFFFFFFF * COORDINATE_SPAN
    return round(x, 2), round(y, 2)


def region_scatter(records: Sequence[Mapping[str, Any]]) -> List[ScatterPoint]:
    points: List[ScatterPoint] = []
    for row in records:
        region = str(row.get("region", ""))
        x, y = REGION_COORDINATES.get(region) or fallback_coordinates(region)
        points.append(
            ScatterPoint(
                label=region,
                x=x,
                y=y,
                size=float(row.get("impressions") or 0.0),
                tooltip={
                    "Impressions": fmt_number(row.get("impressions")),
                    "Conversions": fmt_number(row.get("conversions")),
                    "Revenue": fmt_money(row.get("revenue")),
                },
            )
        )
    return points


def weekly_lines(records: Sequence[Mapping[str, Any]]) -> List[LinePoint]:
    return [
        LinePoint(
            week=fmt_week_label(row.get("week_start"), row.get("week_end")),
            revenue=float(row.get("revenue") or 0.0),
            spend=float(row.get("spend") or 0.0),
        )
        for row in records
    ]


def heat_cells(records: Sequence[Mapping[str, Any]], value_field: str, label_field: str = "label") -> List[HeatCell]:
    values = [float(row.get(value_field) or 0.0) for row in records]
    peak = max(values, default=0.0)
    cells: List[HeatCell] = []
    for idx, (row, value) in enumerate(zip(records, values)):
        cells.append(
            HeatCell(
                id=f"{label_field}-{idx}",
                label=str(row.get(label_field, "")),
                value=value,
                intensity=value / peak if peak > 0 else 0.0,
                metadata={
                    "Impressions": fmt_number(row.get("impressions")),
                    "CTR": fmt_pct(row.get("ctr")),
                },
            )
        )
    return cells


def gender_cards(totals: Mapping[str, GenderTotals]) -> List[MetricCard]:
    cards: List[MetricCard] = []
    for gender, title in (("male", "Males"), ("female", "Females")):
        share = totals.get(gender, GenderTotals())
        cards.append(MetricCard(title=f"Total Clicks by {title}", value=fmt_number(share.clicks)))
        cards.append(MetricCard(title=f"Total Spend by {title}", value=fmt_money(share.spend)))
        cards.append(MetricCard(title=f"Total Revenue by {title}", value=fmt_money(share.revenue)))
    return cards


def device_cards(records: Sequence[Mapping[str, Any]], shares: Mapping[str, float]) -> List[DeviceCard]:
    by_device = {str(row.get("device")): row for row in records}
    ordered = list(DEVICE_ORDER) + [name for name in by_device if name not in DEVICE_ORDER]
    cards: List[DeviceCard] = []
    for device in ordered:
        row = by_device.get(device)
        if row is None:
            cards.append(DeviceCard(device, *([MISSING] * 8)))
            continue
        cards.append(
            DeviceCard(
                device=device,
                impressions=fmt_number(row.get("impressions")),
                clicks=fmt_number(row.get("clicks")),
                conversions=fmt_number(row.get("conversions")),
                spend=fmt_money(row.get("spend")),
                revenue=fmt_money(row.get("revenue")),
                ctr=fmt_pct(row.get("ctr")),
                conversion_rate=fmt_pct(row.get("conversion_rate")),
                traffic_share=fmt_pct(shares.get(device, 0.0), digits=1),
            )
        )
    return cards


def device_bars(records: Sequence[Mapping[str, Any]]) -> Dict[str, List[BarDatum]]:
    groups: Dict[str, List[BarDatum]] = {}
    for row in records:
        device = str(row.get("device"))
        colors = DEVICE_COLORS.get(device, DEVICE_COLORS["Tablet"])
        groups[device] = [
            BarDatum(label="Impressions", value=float(row.get("impressions") or 0.0), color=colors[0]),
            BarDatum(label="Clicks", value=float(row.get("clicks") or 0.0), color=colors[1]),
            BarDatum(label="Conversions", value=float(row.get("conversions") or 0.0), color=colors[2]),
        ]
    return groups


def demographic_table(rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, str]]:
    return [
        {
            "campaign": str(row.get("campaign", "")),
            "age_group": str(row.get("age_group", "")),
            "impressions": fmt_number(row.get("impressions")),
            "clicks": fmt_number(row.get("clicks")),
            "conversions": fmt_number(row.get("conversions")),
            "ctr": fmt_pct(row.get("ctr")),
            "conversion_rate": fmt_pct(row.get("conversion_rate")),
        }
        for row in rows
    ]


def campaign_table(rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, str]]:
    return [
        {
            "name": str(row.get("name", "")),
            "objective": str(row.get("objective", "")),
            "impressions": fmt_number(row.get("impressions")),
            "clicks": fmt_number(row.get("clicks")),
            "conversions": fmt_number(row.get("conversions")),
            "spend": fmt_money(row.get("spend")),
            "revenue": fmt_money(row.get("revenue")),
            "ctr": fmt_pct(row.get("ctr")),
            "cpc": fmt_money(row.get("cpc")),
            "cpa": fmt_money(row.get("cpa")),
            "roas": f"{float(row.get('roas') or 0.0):.2f}x",
        }
        for row in rows
    ]
