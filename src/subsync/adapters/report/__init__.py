"""Public interface for the reconciliation report writer."""

from __future__ import annotations

from .workbook import WorkbookReportPublisher, build_report_frames

__all__ = ["WorkbookReportPublisher", "build_report_frames"]
