"""Public interface for the subscription-platform export adapter."""

from __future__ import annotations

from .reader import ExportReadError, UscreenCsvExport, read_export_rows
from .schema import PaymentRow, PersonRow
from .translator import parse_member, parse_payment

__all__ = [
    "ExportReadError",
    "PaymentRow",
    "PersonRow",
    "UscreenCsvExport",
    "parse_member",
    "parse_payment",
    "read_export_rows",
]
