from campaign_dashboard.application.aggregation import views
from campaign_dashboard.application.aggregation.formatting import fmt_money, fmt_number, fmt_pct, fmt_week_label
from campaign_dashboard.application.aggregation.redistribution import GenderTotals


def test_formatters():
    assert fmt_money(1234.5) == "$1,234.50"
    assert fmt_pct(0.1234) == "12.34%"
    assert fmt_pct(0.8, digits=1) == "80.0%"
    assert fmt_number(1000.0) == "1,000"
    assert fmt_number(12.5) == "12.50"


def test_week_label_from_iso_dates_and_fallback():
    assert fmt_week_label("2024-07-01", "2024-07-07") == "Jul 1 - Jul 7"
    assert fmt_week_label("week-1", "2024-07-07") == "week-1 - Jul 7"


def test_bar_series_keeps_raw_values():
    rows = [{"age_group": "25-34", "spend": 700.0}, {"age_group": "35-44", "spend": 200.0}]
    bars = views.bar_series(rows, "spend", views.SPEND_COLOR, label_field="age_group")
    assert bars == [
        views.BarDatum("25-34", 700.0, "#10B981"),
        views.BarDatum("35-44", 200.0, "#10B981"),
    ]


def test_region_scatter_known_and_unknown_cities():
    rows = [
        {"region": "Dubai", "impressions": 1100.0, "conversions": 10.0, "revenue": 1500.0},
        {"region": "Muscat", "impressions": 50.0, "conversions": 0.0, "revenue": 0.0},
    ]
    dubai, muscat = views.region_scatter(rows)
    assert (dubai.x, dubai.y) == (100.0, 80.0)
    assert dubai.size == 1100.0
    assert dubai.tooltip == {"Impressions": "1,100", "Conversions": "10", "Revenue": "$1,500.00"}
    assert (muscat.x, muscat.y) == views.fallback_coordinates("Muscat")
    assert 0.0 <= muscat.x <= views.COORDINATE_SPAN
    assert views.region_scatter(rows)[1] == muscat


def test_heat_cells_intensity_relative_to_peak():
    rows = [{"label": "a", "revenue": 50.0}, {"label": "b", "revenue": 200.0}]
    cells = views.heat_cells(rows, "revenue")
    assert [cell.intensity for cell in cells] == [0.25, 1.0]
    assert all(cell.intensity == 0.0 for cell in views.heat_cells([{"label": "z", "revenue": 0.0}], "revenue"))


def test_gender_cards_format_totals():
    cards = views.gender_cards({"male": GenderTotals(clicks=1200, spend=350, revenue=1050)})
    assert cards[0] == views.MetricCard("Total Clicks by Males", "1,200")
    assert cards[1] == views.MetricCard("Total Spend by Males", "$350.00")
    assert cards[5] == views.MetricCard("Total Revenue by Females", "$0.00")


def test_device_cards_fixed_order_with_missing_devices():
    rows = [
        {"device": "Smart TV", "impressions": 10.0, "ctr": 0.0},
        {"device": "Mobile", "impressions": 90.0, "clicks": 9.0, "ctr": 0.1, "spend": 12.0},
    ]
    cards = views.device_cards(rows, {"Mobile": 0.9, "Smart TV": 0.1})
    assert [card.device for card in cards] == ["Mobile", "Desktop", "Tablet", "Smart TV"]
    assert cards[0].ctr == "10.00%"
    assert cards[0].traffic_share == "90.0%"
    assert cards[1].impressions == "-"


def test_demographic_table_formats_only_at_boundary():
    rows = [{"campaign": "A", "age_group": "18-24", "impressions": 1500.0, "clicks": 30.0, "conversions": 3.0, "ctr": 0.02, "conversion_rate": 0.1}]
    assert views.demographic_table(rows) == [
        {
            "campaign": "A",
            "age_group": "18-24",
            "impressions": "1,500",
            "clicks": "30",
            "conversions": "3",
            "ctr": "2.00%",
            "conversion_rate": "10.00%",
        }
    ]
