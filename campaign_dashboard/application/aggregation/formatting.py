"""Display formatting used only at the view boundary."""

from __future__ import annotations

from datetime import date
from typing import Any


def fmt_money(value: float | None) -> str:
    if value is None:
        return "$0.00"
    return f"${value:,.2f}"


def fmt_pct(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value * 100:.{digits}f}%"


def fmt_number(value: float | None) -> str:
    if value is None:
        return "0"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def _short_date(text: Any) -> str:
    try:
        parsed = date.fromisoformat(str(text)[:10])
    except ValueError:
        return str(text)
    return f"{parsed:%b} {parsed.day}"


def fmt_week_label(week_start: Any, week_end: Any) -> str:
    return f"{_short_date(week_start)} - {_short_date(week_end)}"
