"""Domain models for campaigns, breakdowns and merged buckets."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from campaign_dashboard.domain.errors import MalformedRecordError


COUNTER_FIELDS: tuple[str, ...] = ("impressions", "clicks", "conversions", "spend", "revenue")
RATIO_FIELDS: tuple[str, ...] = ("ctr", "conversion_rate", "cpc", "cpa", "roas")
TRAFFIC_FIELDS: tuple[str, ...] = ("impressions", "clicks", "conversions")


def to_metric(value: Any, field_name: str, default: float = 0.0) -> float:
    """Parse a non-negative finite counter; ``None`` means the field is absent."""
    if value is None:
        return default
    if isinstance(value, bool):
        raise MalformedRecordError(f"{field_name} must be numeric, got boolean {value!r}")
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if text == "":
            return default
        try:
            parsed = float(text)
        except ValueError as exc:
            raise MalformedRecordError(f"{field_name} is not numeric: {value!r}") from exc
    elif isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError as exc:
            raise MalformedRecordError(f"{field_name} is too large: {value!r}") from exc
    else:
        raise MalformedRecordError(f"{field_name} must be numeric, got {type(value).__name__}")

    if not math.isfinite(parsed):
        raise MalformedRecordError(f"{field_name} must be finite, got {value!r}")
    if parsed < 0:
        raise MalformedRecordError(f"{field_name} must be non-negative, got {value!r}")
    return parsed


def _required_text(row: Mapping[str, Any], key: str) -> str:
    if key not in row or row[key] is None:
        raise MalformedRecordError(f"missing required field '{key}'")
    text = str(row[key]).strip()
    if not text:
        raise MalformedRecordError(f"required field '{key}' is empty")
    return text


def _performance_source(row: Mapping[str, Any]) -> Mapping[str, Any]:
    performance = row.get("performance")
    if performance is None:
        return row
    if not isinstance(performance, Mapping):
        raise MalformedRecordError("performance must be a mapping")
    return performance


@dataclass(frozen=True)
class Counters:
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    spend: float = 0.0
    revenue: float = 0.0

    def __add__(self, other: "Counters") -> "Counters":
        if not isinstance(other, Counters):
            return NotImplemented
        summed = {name: getattr(self, name) + getattr(other, name) for name in COUNTER_FIELDS}
        overflowed = [name for name, value in summed.items() if not math.isfinite(value)]
        if overflowed:
            raise MalformedRecordError(f"{', '.join(overflowed)} overflow when summed")
        return Counters(**summed)

    def with_money(self, spend: float, revenue: float) -> "Counters":
        return Counters(self.impressions, self.clicks, self.conversions, spend, revenue)

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in COUNTER_FIELDS}

    @classmethod
    def from_row(
        cls,
        row: Mapping[str, Any],
        require_impressions: bool = False,
        fields: tuple[str, ...] = COUNTER_FIELDS,
    ) -> "Counters":
        """Read ``fields`` from ``row``; counters outside ``fields`` are left at 0 and never validated."""
        if require_impressions and row.get("impressions") is None:
            raise MalformedRecordError("missing required field 'impressions'")
        return cls(**{name: to_metric(row.get(name), name) for name in fields})


@dataclass(frozen=True)
class RatioMetrics:
    ctr: float = 0.0
    conversion_rate: float = 0.0
    cpc: float = 0.0
    cpa: float = 0.0
    roas: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in RATIO_FIELDS}


@dataclass(frozen=True)
class DemographicBreakdown:
    """Age/gender slice; carries no spend or revenue of its own."""

    age_group: str
    gender: str
    counters: Counters

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DemographicBreakdown":
        source = _performance_source(row)
        return cls(
            age_group=_required_text(row, "age_group"),
            gender=str(row.get("gender", "") or "").strip().lower(),
            counters=Counters.from_row(source, require_impressions=True, fields=TRAFFIC_FIELDS),
        )


@dataclass(frozen=True)
class DeviceBreakdown:
    device: str
    counters: Counters

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DeviceBreakdown":
        source = _performance_source(row)
        return cls(
            device=_required_text(row, "device"),
            counters=Counters.from_row(source, require_impressions=True),
        )


@dataclass(frozen=True)
class RegionBreakdown:
    region: str
    counters: Counters

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RegionBreakdown":
        source = _performance_source(row)
        return cls(
            region=_required_text(row, "region"),
            counters=Counters.from_row(source, require_impressions=True),
        )


@dataclass(frozen=True)
class WeeklyBreakdown:
    week_start: str
    week_end: str
    counters: Counters

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WeeklyBreakdown":
        source = _performance_source(row)
        return cls(
            week_start=_required_text(row, "week_start"),
            week_end=_required_text(row, "week_end"),
            counters=Counters.from_row(source, require_impressions=True),
        )


@dataclass(frozen=True)
class Campaign:
    """Read-only campaign snapshot as delivered by the data source."""

    id: str
    name: str
    objective: str
    counters: Counters
    demographic_breakdown: tuple[DemographicBreakdown, ...] = ()
    device_performance: tuple[DeviceBreakdown, ...] = ()
    regional_performance: tuple[RegionBreakdown, ...] = ()
    weekly_performance: tuple[WeeklyBreakdown, ...] = ()

    @classmethod
    def header_from_row(cls, row: Mapping[str, Any]) -> "Campaign":
        """Build the campaign without breakdowns; breakdowns are parsed record by record."""
        name = _required_text(row, "name")
        counters = Counters.from_row(row, require_impressions=True)
        raw_id = row.get("id")
        return cls(
            id=str(raw_id) if raw_id is not None else name,
            name=name,
            objective=str(row.get("objective", "") or "").strip(),
            counters=counters,
        )


@dataclass(frozen=True)
class MergedBucket:
    dimension: str
    key_fields: tuple[str, ...]
    key: tuple[str, ...]
    counters: Counters
    ratios: RatioMetrics
    contributions: int = 1

    @property
    def label(self) -> str:
        return " / ".join(self.key)

    def as_record(self) -> dict[str, Any]:
        record: dict[str, Any] = dict(zip(self.key_fields, self.key))
        record["label"] = self.label
        record.update(self.counters.as_dict())
        record.update(self.ratios.as_dict())
        record["contributions"] = self.contributions
        return record


@dataclass(frozen=True)
class SkippedRecord:
    kind: str
    campaign: str
    index: int
    reason: str

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "campaign": self.campaign, "index": self.index, "reason": self.reason}


@dataclass(frozen=True)
class ParseResult:
    campaigns: tuple[Campaign, ...]
    skipped: tuple[SkippedRecord, ...] = field(default_factory=tuple)
