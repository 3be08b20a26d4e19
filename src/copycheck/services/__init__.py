"""Services for copycheck."""

from copycheck.services.report_service import (
    CompareReport,
    ReportService,
    ScanSummary,
    find_missing,
    write_missing_report,
)

__all__ = ["CompareReport", "ReportService", "ScanSummary", "find_missing", "write_missing_report"]
