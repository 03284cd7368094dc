"""Use cases for the weekly activity report."""

from .files import delete_report, get_report_path, list_reports
from .weekly_report import RECOMMENDATIONS, build_weekly_report, generate_weekly_report

__all__ = [
    "RECOMMENDATIONS",
    "build_weekly_report",
    "delete_report",
    "generate_weekly_report",
    "get_report_path",
    "list_reports",
]
