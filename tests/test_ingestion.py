import logging

import pytest

from campaign_dashboard.domain.errors import MalformedRecordError, MissingInputError
from campaign_dashboard.domain.models import to_metric
from campaign_dashboard.ingestion import campaigns_from_document, parse_campaigns, parse_document


def test_missing_optional_counters_default_to_zero():
    result = parse_campaigns([{"name": "Sparse", "impressions": 10}])
    campaign = result.campaigns[0]
    assert result.skipped == ()
    assert campaign.counters.clicks == 0.0
    assert campaign.counters.revenue == 0.0
    assert campaign.objective == ""
    assert campaign.demographic_breakdown == ()


def test_campaign_missing_name_or_impressions_is_skipped():
    result = parse_campaigns(
        [
            {"impressions": 10},
            {"name": "No impressions", "clicks": 1},
            {"name": "Zero impressions", "impressions": 0},
        ]
    )
    assert [c.name for c in result.campaigns] == ["Zero impressions"]
    assert [(s.kind, s.index) for s in result.skipped] == [("campaign", 0), ("campaign", 1)]
    assert "name" in result.skipped[0].reason
    assert "impressions" in result.skipped[1].reason


def test_malformed_breakdown_skips_only_that_record(make_campaign):
    row = make_campaign(
        "Partial",
        impressions=100,
        device_performance=[
            {"device": "Mobile", "impressions": 60},
            {"impressions": 40},
            {"device": "Tablet", "clicks": 3},
            "not-a-record",
        ],
    )
    result = parse_campaigns([row])
    assert [d.device for d in result.campaigns[0].device_performance] == ["Mobile"]
    assert [(s.kind, s.campaign, s.index) for s in result.skipped] == [
        ("device", "Partial", 1),
        ("device", "Partial", 2),
        ("device", "Partial", 3),
    ]


def test_flat_and_nested_performance_shapes(make_campaign):
    row = make_campaign(
        impressions=100,
        demographic_breakdown=[
            {"age_group": "18-24", "gender": "Male", "performance": {"impressions": 30, "clicks": "3"}},
            {"age_group": "25-34", "gender": "Female", "impressions": 70, "clicks": 7, "spend": 99},
        ],
    )
    demo = parse_campaigns([row]).campaigns[0].demographic_breakdown
    assert demo[0].gender == "male"
    assert demo[0].counters.clicks == 3.0
    assert demo[1].counters.impressions == 70.0
    assert demo[1].counters.spend == 0.0


def test_demographic_money_fields_are_ignored_not_validated(make_campaign):
    row = make_campaign(
        impressions=100,
        demographic_breakdown=[{"age_group": "18-24", "gender": "male", "impressions": 40, "spend": -5, "revenue": "n/a"}],
    )
    result = parse_campaigns([row])
    assert result.skipped == ()
    assert result.campaigns[0].demographic_breakdown[0].counters.impressions == 40.0


def test_oversized_integer_skips_only_its_record():
    result = parse_campaigns([{"name": "Big", "impressions": 10**400}, {"name": "ok", "impressions": 1}])
    assert [campaign.name for campaign in result.campaigns] == ["ok"]
    assert result.skipped[0].campaign == "Big"
    assert "too large" in result.skipped[0].reason


def test_numeric_strings_with_separators():
    result = parse_campaigns([{"name": "Strings", "impressions": "1,200", "spend": " 45.5 "}])
    assert result.campaigns[0].counters.impressions == 1200.0
    assert result.campaigns[0].counters.spend == 45.5


@pytest.mark.parametrize("value", [True, "abc", -1, float("nan"), float("inf"), 10**400, [1]])
def test_to_metric_rejects_invalid_values(value):
    with pytest.raises(MalformedRecordError):
        to_metric(value, "clicks")


def test_non_list_breakdown_is_reported(make_campaign):
    result = parse_campaigns([make_campaign(impressions=5, regional_performance={"region": "Dubai"})])
    assert result.campaigns[0].regional_performance == ()
    assert result.skipped[0].kind == "region"
    assert result.skipped[0].index == -1


def test_source_rows_are_not_mutated(document):
    before = repr(document)
    parse_document(document)
    assert repr(document) == before


@pytest.mark.parametrize("document", [None, [], {"data": []}, {"campaigns": "nope"}])
def test_absent_input_declines_to_run(document):
    with pytest.raises(MissingInputError):
        campaigns_from_document(document)


def test_skipped_records_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="campaign_dashboard.ingestion"):
        parse_campaigns([{"impressions": 1}, {"name": "ok", "impressions": 1}])
    assert "Skipped 1 malformed record(s)" in caplog.text
