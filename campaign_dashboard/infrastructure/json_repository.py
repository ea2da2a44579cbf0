"""Infrastructure adapter loading the marketing document from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from campaign_dashboard.domain.errors import DataSourceError


logger = logging.getLogger(__name__)


def load_marketing_document(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise DataSourceError(f"Marketing data file not found: {path}")
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DataSourceError(f"Failed to parse marketing data {path}: {exc.msg} (line {exc.lineno})") from exc
    except OSError as exc:
        raise DataSourceError(f"Failed to read marketing data {path}: {exc}") from exc

    if not isinstance(document, dict):
        raise DataSourceError(f"Marketing data {path} must contain a JSON object, got {type(document).__name__}")
    logger.debug("Loaded marketing document from %s", path)
    return document
