"""Findings collection and structured reports."""

from .diagnostics import Diagnostics, Finding, Severity
from .report import JsonlFindingsReport, ReportEvent, utc_timestamp

__all__ = ["Diagnostics", "Finding", "JsonlFindingsReport", "ReportEvent", "Severity", "utc_timestamp"]
