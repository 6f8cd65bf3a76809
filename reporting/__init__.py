"""Reporting module for size diff output."""

from reporting.formatter import ReportFormatter, format_report, pretty_bytes

__all__ = [
    "ReportFormatter",
    "format_report",
    "pretty_bytes",
]
