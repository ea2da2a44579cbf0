"""Infrastructure adapter for summary export targets."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import polars as pl
from openpyxl import Workbook


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")


def _excel_cell_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return value


def write_workbook(path: Path, sheets: dict[str, pl.DataFrame]) -> None:
    workbook = Workbook()
    workbook.remove(workbook.active)

    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=str(sheet_name)[:31])
        worksheet.append(frame.columns)
        for row in frame.iter_rows(named=False):
            worksheet.append([_excel_cell_value(value) for value in row])

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)


def save_dashboard_workbook(path: Path, sheets: dict[str, pl.DataFrame]) -> tuple[bool, str]:
    try:
        write_workbook(path, sheets)
    except PermissionError as exc:
        return False, str(exc)
    return True, ""
