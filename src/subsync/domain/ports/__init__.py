"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import MemberExport, MemberExportSource, TargetRecordFetcher
from .publishing import (
    ResultPublisher,
    TargetUpdate,
    TargetUpdater,
    UpdateFailure,
    UpdateOutcome,
)

__all__ = [
    "MemberExport",
    "MemberExportSource",
    "ResultPublisher",
    "TargetRecordFetcher",
    "TargetUpdate",
    "TargetUpdater",
    "UpdateFailure",
    "UpdateOutcome",
]
