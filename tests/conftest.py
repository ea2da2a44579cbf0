import copy

import pytest

from campaign_dashboard.ingestion import parse_campaigns


SAMPLE_DOCUMENT = {
    "campaigns": [
        {
            "id": 1,
            "name": "Summer Sale - A",
            "objective": "Conversions",
            "impressions": 1000,
            "clicks": 100,
            "conversions": 10,
            "spend": 500,
            "revenue": 1500,
            "demographic_breakdown": [
                {"age_group": "25-34", "gender": "Male", "performance": {"impressions": 600, "clicks": 70, "conversions": 7}},
                {"age_group": "25-34", "gender": "Female", "performance": {"impressions": 400, "clicks": 30, "conversions": 3}},
            ],
            "device_performance": [
                {"device": "Mobile", "impressions": 700, "clicks": 80, "conversions": 8, "spend": 350, "revenue": 1100},
                {"device": "Desktop", "impressions": 300, "clicks": 20, "conversions": 2, "spend": 150, "revenue": 400},
            ],
            "regional_performance": [
                {"region": "Dubai", "impressions": 600, "clicks": 60, "conversions": 6, "spend": 300, "revenue": 900},
                {"region": "Riyadh", "impressions": 400, "clicks": 40, "conversions": 4, "spend": 200, "revenue": 600},
            ],
            "weekly_performance": [
                {"week_start": "2024-07-08", "week_end": "2024-07-14", "impressions": 500, "clicks": 50, "conversions": 5, "spend": 250, "revenue": 800},
                {"week_start": "2024-07-01", "week_end": "2024-07-07", "impressions": 500, "clicks": 50, "conversions": 5, "spend": 250, "revenue": 700},
            ],
        },
        {
            "id": 2,
            "name": "Winter Promo",
            "objective": "Awareness",
            "impressions": 500,
            "clicks": 50,
            "conversions": 4,
            "spend": 200,
            "revenue": 600,
            "demographic_breakdown": [
                {"age_group": "35-44", "gender": "Female", "performance": {"impressions": 500, "clicks": 50, "conversions": 4}},
            ],
            "device_performance": [
                {"device": "Mobile", "impressions": 500, "clicks": 50, "conversions": 4, "spend": 200, "revenue": 600},
            ],
            "regional_performance": [
                {"region": "Doha", "impressions": 500, "clicks": 50, "conversions": 4, "spend": 200, "revenue": 600},
            ],
            "weekly_performance": [
                {"week_start": "2024-07-01", "week_end": "2024-07-07", "impressions": 500, "clicks": 50, "conversions": 4, "spend": 200, "revenue": 600},
            ],
        },
    ]
}


@pytest.fixture
def document():
    """Fresh deep copy so tests can mutate freely."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def campaigns(document):
    return parse_campaigns(document["campaigns"]).campaigns


@pytest.fixture
def make_campaign():
    def _make(name="Campaign", **overrides):
        row = {
            "name": name,
            "objective": "Conversions",
            "impressions": 0,
            "clicks": 0,
            "conversions": 0,
            "spend": 0,
            "revenue": 0,
        }
        row.update(overrides)
        return row

    return _make
