import math

import polars as pl
import pytest

from campaign_dashboard.application.aggregation.metrics import derive_ratios, ratio_exprs, safe_ratio
from campaign_dashboard.domain.models import Counters


def test_derive_ratios_from_counters():
    ratios = derive_ratios(Counters(impressions=1000, clicks=50, conversions=5, spend=100, revenue=400))
    assert ratios.ctr == pytest.approx(0.05)
    assert ratios.conversion_rate == pytest.approx(0.1)
    assert ratios.cpc == pytest.approx(2.0)
    assert ratios.cpa == pytest.approx(20.0)
    assert ratios.roas == pytest.approx(4.0)


def test_zero_denominators_default_to_zero():
    ratios = derive_ratios(Counters(impressions=0, clicks=0, conversions=0, spend=0, revenue=250))
    assert ratios.as_dict() == {"ctr": 0.0, "conversion_rate": 0.0, "cpc": 0.0, "cpa": 0.0, "roas": 0.0}


def test_ratios_are_finite_for_all_zero_input():
    ratios = derive_ratios(Counters())
    assert all(math.isfinite(value) for value in ratios.as_dict().values())


def test_safe_ratio_never_returns_infinity():
    assert safe_ratio(1e308, 1e-308) == 0.0
    assert safe_ratio(5.0, 0.0) == 0.0


def test_ratio_exprs_match_scalar_rules():
    frame = pl.DataFrame(
        {
            "impressions": [100.0, 0.0],
            "clicks": [10.0, 0.0],
            "conversions": [2.0, 0.0],
            "spend": [20.0, 0.0],
            "revenue": [60.0, 30.0],
        }
    ).with_columns(ratio_exprs())
    first, second = frame.to_dicts()
    assert first["ctr"] == pytest.approx(0.1)
    assert first["cpa"] == pytest.approx(10.0)
    assert first["roas"] == pytest.approx(3.0)
    assert second["ctr"] == 0.0
    assert second["roas"] == 0.0
