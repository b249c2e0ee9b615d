"""Excel workbook rendering of a reconciliation result for human review."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils.dataframe import dataframe_to_rows

from subsync.domain.ports.publishing import ResultPublisher

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date
    from pathlib import Path

    from subsync.domain.model import TargetRecord
    from subsync.domain.ports.fetching import MemberExport
    from subsync.domain.reconciliation.contracts import ReconciliationResult

log = getLogger(__name__)

SYNC_TIME_COLUMN: Final[str] = "Sync Time"

USERS_SHEET: Final[str] = "Uscreen Users"
PAYMENTS_SHEET: Final[str] = "Uscreen Payments"
TARGETS_SHEET: Final[str] = "Salesforce Data"
NEEDS_UPDATE_SHEET: Final[str] = "Needs Update"
NEW_USERS_SHEET: Final[str] = "New Users (Review)"
CANCELLED_SHEET: Final[str] = "Cancelled"
NO_MATCH_SHEET: Final[str] = "No Match"
SUMMARY_SHEET: Final[str] = "Summary"

HEADER_FONT = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="2E4057", end_color="2E4057", fill_type="solid")
DATA_FONT = Font(name="Calibri", size=10)
ALT_ROW_FILL = PatternFill(start_color="F7F9FC", end_color="F7F9FC", fill_type="solid")
THIN_BORDER = Border(bottom=Side(style="thin", color="D0D0D0"))
MAX_COLUMN_WIDTH: Final[int] = 40


def _date_text(value: date | datetime | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value.isoformat()


def _frame(columns: Sequence[str], rows: Sequence[Sequence[object]], synced: str) -> pd.DataFrame:
    return pd.DataFrame(
        [[*row, synced] for row in rows],
        columns=[*columns, SYNC_TIME_COLUMN],
    )


def build_report_frames(
    result: ReconciliationResult,
    *,
    export: MemberExport,
    targets: Sequence[TargetRecord],
    synced_at: datetime,
) -> dict[str, pd.DataFrame]:
    """Return one DataFrame per report tab, in tab order."""

    synced = synced_at.isoformat()
    return {
        USERS_SHEET: _frame(
            ["User ID", "Name", "Email", "Status", "Lifetime", "Segment", "Created Date"],
            [
                [m.external_id, m.name, m.email, m.status, m.lifetime_value, m.segment, m.created_on]
                for m in export.members
            ],
            synced,
        ),
        PAYMENTS_SHEET: _frame(
            ["Email", "Name", "Charge Date", "Amount", "Subscription", "Coupon", "Payment ID"],
            [
                [
                    p.member_email,
                    p.member_name,
                    p.charged_at.isoformat() if p.charged_at else "",
                    p.amount,
                    p.subscription,
                    p.coupon,
                    p.payment_id,
                ]
                for p in export.payments
                if p.amount > 0
            ],
            synced,
        ),
        TARGETS_SHEET: _frame(
            [
                "SF ID",
                "Name",
                "Contact Email",
                "Uscreen ID",
                "Active",
                "Subscription Status",
                "Last Payment Date",
            ],
            [
                [
                    t.target_id,
                    t.name,
                    t.contact_email,
                    t.external_id,
                    "Yes" if t.active else "No",
                    t.status,
                    _date_text(t.last_payment_date),
                ]
                for t in targets
            ],
            synced,
        ),
        NEEDS_UPDATE_SHEET: _frame(
            [
                "SF ID",
                "Uscreen ID",
                "Email",
                "SF Last Payment",
                "New Payment Date",
                "New Payment Amount",
                "Action",
            ],
            [
                [
                    u.match.target.target_id,
                    u.match.external_id,
                    u.match.email,
                    _date_text(u.target_last_payment),
                    _date_text(u.source_last_payment),
                    u.latest_payment.amount,
                    "UPDATE SF",
                ]
                for u in result.needs_update
            ],
            synced,
        ),
        NEW_USERS_SHEET: _frame(
            ["Uscreen ID", "Email", "Name", "Status", "Lifetime Amount", "Action"],
            [
                [n.external_id, n.email, n.member.name, n.status, n.lifetime_value, "MANUAL REVIEW"]
                for n in result.new_users
            ],
            synced,
        ),
        CANCELLED_SHEET: _frame(
            ["SF ID", "Uscreen ID", "Email", "Previous Status", "New Status", "Action"],
            [
                [
                    c.match.target.target_id,
                    c.match.external_id,
                    c.match.email,
                    c.previous_status or "Unknown",
                    c.new_status,
                    "UPDATE STATUS",
                ]
                for c in result.cancelled
            ],
            synced,
        ),
        NO_MATCH_SHEET: _frame(
            ["Uscreen ID", "Email", "Name", "Status", "Reason"],
            [[u.external_id, u.email, u.member.name, u.member.status, u.reason] for u in result.no_match],
            synced,
        ),
    }


def _write_summary(wb: Workbook, result: ReconciliationResult, synced_at: datetime) -> None:
    ws = wb.create_sheet(SUMMARY_SHEET, 0)
    ws.cell(row=1, column=1, value="Member Sync Report").font = Font(
        name="Calibri", size=16, bold=True, color="2E4057"
    )
    ws.cell(row=2, column=1, value=f"Synced: {synced_at:%Y-%m-%d %H:%M:%S %Z}").font = Font(
        name="Calibri", size=10, color="888888"
    )
    for offset, (bucket, count) in enumerate(result.summary().items()):
        ws.cell(row=4 + offset, column=1, value=bucket).font = DATA_FONT
        ws.cell(row=4 + offset, column=2, value=count).font = DATA_FONT
    ws.column_dimensions["A"].width = 20


def _write_sheet(wb: Workbook, title: str, frame: pd.DataFrame) -> None:
    ws = wb.create_sheet(title=title)
    for r_idx, row_data in enumerate(dataframe_to_rows(frame, index=False, header=True), start=1):
        for c_idx, value in enumerate(row_data, start=1):
            cell = ws.cell(row=r_idx, column=c_idx, value=value)
            if r_idx == 1:
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL
                cell.alignment = Alignment(horizontal="center")
            else:
                cell.font = DATA_FONT
                cell.border = THIN_BORDER
                if r_idx % 2 == 1:
                    cell.fill = ALT_ROW_FILL
    ws.freeze_panes = "A2"

    for col_cells in ws.columns:
        max_len = max((len(str(cell.value)) for cell in col_cells if cell.value is not None), default=0)
        ws.column_dimensions[col_cells[0].column_letter].width = min(max_len + 2, MAX_COLUMN_WIDTH)


@dataclass(frozen=True, slots=True)
class WorkbookReportPublisher:
    """Write every input snapshot and result bucket to one ``.xlsx`` file."""

    path: Path

    def __call__(
        self,
        result: ReconciliationResult,
        *,
        export: MemberExport,
        targets: Sequence[TargetRecord],
        synced_at: datetime,
    ) -> None:
        frames = build_report_frames(result, export=export, targets=targets, synced_at=synced_at)
        wb = Workbook()
        wb.remove(wb.worksheets[0])
        _write_summary(wb, result, synced_at)
        for title, frame in frames.items():
            _write_sheet(wb, title, frame)
            log.debug("Prepared %s rows for %r", len(frame), title)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(self.path)
        log.info("Wrote reconciliation report to %s", self.path)


if TYPE_CHECKING:
    _publisher_check: ResultPublisher = WorkbookReportPublisher(Path())
