from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from subsync.adapters.uscreen import ExportReadError, UscreenCsvExport, read_export_rows

if TYPE_CHECKING:
    from pathlib import Path

PEOPLE_CSV = """\ufeffUser ID,User Name,User email,Status,Lifetime,Segment,Created on date
7,Jane Doe,Jane@Example.com,active,$100.00,Subscribers,2023-05-01
8,Bob Roe,bob@example.com,cancelled,0,Churned,2023-06-01
,No Id,noid@example.com,active,,,
"""

PAYMENTS_CSV = """Email,Name,Charge Date,Charge Amount,Subscription,Coupon,Payment ID,User ID
jane@example.com,Jane Doe,2024-02-01 10:00:00 UTC,20.00,Monthly,,pay_1,7
bob@example.com,Bob Roe,not a date,$0.00,Monthly,FREE,pay_2,
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_read_export_rows_keeps_text_and_blanks(tmp_path: Path) -> None:
    rows = read_export_rows(_write(tmp_path, "people.csv", PEOPLE_CSV))

    assert len(rows) == 3
    assert rows[0]["User ID"] == "7"
    assert rows[0]["Lifetime"] == "$100.00"
    assert rows[2]["User ID"] == ""
    assert rows[2]["Lifetime"] == ""


def test_read_export_rows_strips_header_whitespace(tmp_path: Path) -> None:
    rows = read_export_rows(_write(tmp_path, "people.csv", " User ID , Status \n0042,active\n"))

    assert rows == [{"User ID": "0042", "Status": "active"}]


def test_read_export_rows_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ExportReadError):
        read_export_rows(tmp_path / "missing.csv")


def test_read_export_rows_empty_file_is_empty(tmp_path: Path) -> None:
    assert read_export_rows(_write(tmp_path, "empty.csv", "")) == []


def test_csv_export_builds_canonical_snapshot(tmp_path: Path) -> None:
    export = UscreenCsvExport(
        people_path=_write(tmp_path, "people.csv", PEOPLE_CSV),
        payments_path=_write(tmp_path, "payments.csv", PAYMENTS_CSV),
    )()

    jane, bob, no_id = export.members
    assert jane.external_id == "7"
    assert jane.email == "Jane@Example.com"
    assert jane.lifetime_value == pytest.approx(100.0)
    assert jane.name == "Jane Doe"
    assert bob.segment == "Churned"
    assert no_id.external_id == ""
    assert no_id.lifetime_value == 0.0

    paid, free = export.payments
    assert paid.member_external_id == "7"
    assert paid.amount == pytest.approx(20.0)
    assert paid.charged_at == datetime(2024, 2, 1, 10, tzinfo=UTC)
    assert paid.payment_id == "pay_1"
    assert free.amount == 0.0
    assert free.charged_at is None
    assert free.coupon == "FREE"
