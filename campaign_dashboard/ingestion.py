"""Parse the fetched marketing document into read-only Campaign models."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Sequence

from campaign_dashboard.domain.errors import MalformedRecordError, MissingInputError
from campaign_dashboard.domain.models import (
    Campaign,
    DemographicBreakdown,
    DeviceBreakdown,
    ParseResult,
    RegionBreakdown,
    SkippedRecord,
    WeeklyBreakdown,
)


logger = logging.getLogger(__name__)

BREAKDOWN_SOURCES: Dict[str, tuple[str, Callable[[Mapping[str, Any]], Any]]] = {
    "demographic_breakdown": ("demographic", DemographicBreakdown.from_row),
    "device_performance": ("device", DeviceBreakdown.from_row),
    "regional_performance": ("region", RegionBreakdown.from_row),
    "weekly_performance": ("week", WeeklyBreakdown.from_row),
}


def campaigns_from_document(document: Any) -> Sequence[Any]:
    if document is None:
        raise MissingInputError("No marketing document was provided.")
    if not isinstance(document, Mapping):
        raise MissingInputError(f"Marketing document must be a mapping, got {type(document).__name__}")
    if document.get("campaigns") is None:
        raise MissingInputError("Marketing document has no 'campaigns' list.")
    return require_campaign_list(document["campaigns"])


def require_campaign_list(raw_campaigns: Any) -> Sequence[Any]:
    if raw_campaigns is None:
        raise MissingInputError("No campaigns were provided.")
    if not isinstance(raw_campaigns, (list, tuple)):
        raise MissingInputError(f"'campaigns' must be a list, got {type(raw_campaigns).__name__}")
    return raw_campaigns


def _campaign_label(row: Any, index: int) -> str:
    if isinstance(row, Mapping) and row.get("name"):
        return str(row["name"])
    return f"#{index}"


def _parse_breakdowns(
    row: Mapping[str, Any],
    source_key: str,
    campaign_label: str,
    skipped: List[SkippedRecord],
) -> tuple[Any, ...]:
    kind, parser = BREAKDOWN_SOURCES[source_key]
    raw_items = row.get(source_key)
    if raw_items is None:
        return ()
    if not isinstance(raw_items, (list, tuple)):
        skipped.append(SkippedRecord(kind, campaign_label, -1, f"'{source_key}' must be a list"))
        return ()

    parsed: List[Any] = []
    for idx, item in enumerate(raw_items):
        if not isinstance(item, Mapping):
            skipped.append(SkippedRecord(kind, campaign_label, idx, "breakdown record is not a mapping"))
            continue
        try:
            parsed.append(parser(item))
        except MalformedRecordError as exc:
            skipped.append(SkippedRecord(kind, campaign_label, idx, str(exc)))
    return tuple(parsed)


def parse_campaigns(raw_campaigns: Sequence[Any]) -> ParseResult:
    """Validate campaigns one by one; malformed records are skipped and reported."""
    campaigns: List[Campaign] = []
    skipped: List[SkippedRecord] = []
    for index, row in enumerate(raw_campaigns):
        label = _campaign_label(row, index)
        if not isinstance(row, Mapping):
            skipped.append(SkippedRecord("campaign", label, index, "campaign record is not a mapping"))
            continue
        try:
            header = Campaign.header_from_row(row)
        except MalformedRecordError as exc:
            skipped.append(SkippedRecord("campaign", label, index, str(exc)))
            continue

        breakdowns = {
            source_key: _parse_breakdowns(row, source_key, header.name, skipped)
            for source_key in BREAKDOWN_SOURCES
        }
        campaigns.append(replace(header, **breakdowns))

    if skipped:
        logger.warning("Skipped %d malformed record(s) while parsing %d campaign(s)", len(skipped), len(raw_campaigns))
        for record in skipped:
            logger.debug("Skipped %s record %s[%d]: %s", record.kind, record.campaign, record.index, record.reason)
    return ParseResult(campaigns=tuple(campaigns), skipped=tuple(skipped))


def parse_document(document: Any) -> ParseResult:
    return parse_campaigns(campaigns_from_document(document))
