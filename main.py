"""Campaign dashboard entrypoint."""

from __future__ import annotations

import logging
import sys
from time import perf_counter

from campaign_dashboard.application import DashboardOptions, build_dashboard
from campaign_dashboard.application.aggregation.frames import campaign_frame
from campaign_dashboard.config import load_settings
from campaign_dashboard.domain.errors import DataSourceError, MissingInputError
from campaign_dashboard.infrastructure import load_marketing_document, save_dashboard_workbook, save_summary_json


logger = logging.getLogger("campaign_dashboard")


def main() -> int:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    try:
        document = load_marketing_document(settings.input_path)
        _mark("load_document")
        result = build_dashboard(document, DashboardOptions(top_n=settings.top_n))
        _mark("build_dashboard")
    except (DataSourceError, MissingInputError) as exc:
        logger.error("Error loading data: %s", exc)
        return 1

    output_json_path = settings.output_dir / "dashboard.json"
    output_excel_path = settings.output_dir / "dashboard.xlsx"
    save_summary_json(output_json_path, result.to_summary())
    _mark("save_json")

    sheets = {"campaigns": campaign_frame(result.filtered_campaigns)}
    for dimension, aggregation in result.aggregations.items():
        sheets[dimension] = aggregation.to_frame()
    excel_saved, excel_error_message = save_dashboard_workbook(output_excel_path, sheets)
    _mark("save_excel")

    logger.info(
        "Dashboard prepared: campaigns=%d, skipped=%d",
        len(result.filtered_campaigns),
        len(result.skipped),
    )
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in stage_timings])
    logger.info("Stage Timing: %s", stage_text)
    logger.info("Total Elapsed: %.3fs", perf_counter() - pipeline_start)
    logger.info("Saved JSON: %s", output_json_path)
    if excel_saved:
        logger.info("Saved Excel: %s", output_excel_path)
    else:
        logger.warning("Excel save skipped (file may be open/locked): %s", excel_error_message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
