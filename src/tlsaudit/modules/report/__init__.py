"""Reporting module for tlsaudit."""

from .json_report import generate_json_report
from .summary import build_summary, count_by_rule

__all__ = ["build_summary", "count_by_rule", "generate_json_report"]
