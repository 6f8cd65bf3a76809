"""Services package for the asset size reporter."""

from services.size_reporter import SizeReporter, ReporterOptions, SizeReport, ReportPersistError

__all__ = [
    "SizeReporter",
    "ReporterOptions",
    "SizeReport",
    "ReportPersistError",
]
