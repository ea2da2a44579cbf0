"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


DEFAULT_INPUT_PATH = "data/marketing_data.json"
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_TOP_N = 10
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    input_path: Path
    output_dir: Path
    top_n: int
    log_level: str

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def _parse_top_n(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid DASHBOARD_TOP_N: {raw}") from exc
    if value < 1:
        raise ValueError(f"DASHBOARD_TOP_N must be >= 1, got {value}")
    return value


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid DASHBOARD_LOG_LEVEL: {raw} (expected one of {', '.join(LOG_LEVELS)})")
    return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        input_path=Path(env.get("DASHBOARD_INPUT_PATH", DEFAULT_INPUT_PATH)),
        output_dir=Path(env.get("DASHBOARD_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
        top_n=_parse_top_n(env.get("DASHBOARD_TOP_N", str(DEFAULT_TOP_N))),
        log_level=_parse_log_level(env.get("DASHBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
    )
