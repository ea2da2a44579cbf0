"""Infrastructure layer package."""

from .json_repository import load_marketing_document
from .report_exporter import save_dashboard_workbook, save_summary_json

__all__ = ["load_marketing_document", "save_dashboard_workbook", "save_summary_json"]
