"""Filtering, ranking and top-N selection helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from campaign_dashboard.domain.models import Campaign


SORT_DIRECTIONS: tuple[str, ...] = ("asc", "desc")


@dataclass(frozen=True)
class SortSpec:
    key: str
    direction: str = "desc"

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Invalid sort direction '{self.direction}', expected one of {SORT_DIRECTIONS}")

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


def _sort_value(value: Any) -> tuple[int, Any]:
    if value is None:
        return (0, 0.0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, float(value))
    return (2, str(value).casefold())


def _normalize_categories(categories: Optional[Iterable[str]]) -> set[str]:
    if not categories:
        return set()
    return {str(item).strip().casefold() for item in categories if str(item).strip()}


def _matches(name: Any, category: Any, query: str, categories: set[str]) -> bool:
    if query and query not in str(name or "").casefold():
        return False
    if categories and str(category or "").strip().casefold() not in categories:
        return False
    return True


def filter_records(
    records: Sequence[Dict[str, Any]],
    name_query: str = "",
    categories: Optional[Iterable[str]] = None,
    name_field: str = "name",
    category_field: str = "objective",
) -> List[Dict[str, Any]]:
    query = (name_query or "").strip().casefold()
    wanted = _normalize_categories(categories)
    return [
        record
        for record in records
        if _matches(record.get(name_field), record.get(category_field), query, wanted)
    ]


def filter_campaigns(
    campaigns: Sequence[Campaign],
    name_query: str = "",
    categories: Optional[Iterable[str]] = None,
    category_field: str = "objective",
) -> List[Campaign]:
    query = (name_query or "").strip().casefold()
    wanted = _normalize_categories(categories)
    return [
        campaign
        for campaign in campaigns
        if _matches(campaign.name, getattr(campaign, category_field, ""), query, wanted)
    ]


def rank_records(
    records: Sequence[Dict[str, Any]],
    sort: SortSpec,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Stable sort by ``sort.key``; equal keys keep their input order."""
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    ordered = sorted(records, key=lambda row: _sort_value(row.get(sort.key)), reverse=sort.descending)
    if limit is None:
        return ordered
    return ordered[:limit]
