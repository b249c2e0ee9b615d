from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest
from openpyxl import load_workbook

from subsync.ui import cli as cli_module
from tests.helpers.salesforce import program_role

if TYPE_CHECKING:
    from pathlib import Path

PEOPLE_CSV = """User ID,User Name,User email,Status,Lifetime,Segment,Created on date
7,Jane Doe,jane@example.com,active,100,,2023-05-01
9,New Person,new@example.com,active,49.99,,2023-07-01
"""

PAYMENTS_CSV = """Email,Name,Charge Date,Charge Amount,Subscription,Coupon,Payment ID,User ID
jane@example.com,Jane Doe,2024-02-01,20.00,Monthly,,pay_1,7
"""


@pytest.fixture
def exports(tmp_path: Path) -> tuple[Path, Path, Path]:
    people = tmp_path / "people.csv"
    people.write_text(PEOPLE_CSV)
    payments = tmp_path / "payments.csv"
    payments.write_text(PAYMENTS_CSV)
    roles = tmp_path / "roles.json"
    roles.write_text(json.dumps([program_role("a07", member_id="7", last_payment="2024-01-01")]))
    return people, payments, roles


def _sync_args(exports: tuple[Path, Path, Path], *extra: str) -> list[str]:
    people, payments, roles = exports
    return [
        "sync",
        "--people",
        str(people),
        "--payments",
        str(payments),
        "--targets-json",
        str(roles),
        *extra,
    ]


def test_cli_writes_report_from_local_files(
    tmp_path: Path, exports: tuple[Path, Path, Path]
) -> None:
    report = tmp_path / "out" / "report.xlsx"

    cli_module.main(_sync_args(exports, "--report", str(report)))

    wb = load_workbook(report)
    needs_update = wb["Needs Update"]
    assert needs_update.max_row == 2
    assert needs_update["A2"].value == "a07"
    assert wb["New Users (Review)"]["A2"].value == "9"


def test_cli_defaults_report_into_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, exports: tuple[Path, Path, Path]
) -> None:
    data_dir = tmp_path / "data"
    monkeypatch.setenv("SUBSYNC_DATA_DIR", str(data_dir))

    cli_module.main(_sync_args(exports))

    reports = list((data_dir / "reports").glob("member-sync-*.xlsx"))
    assert len(reports) == 1


def test_cli_dry_run_skips_report(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, exports: tuple[Path, Path, Path]
) -> None:
    captured: dict[str, object] = {}
    real_run = cli_module.run_member_sync

    def spy(**kwargs: object):  # noqa: ANN202
        captured.update(kwargs)
        return real_run(**kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(cli_module, "run_member_sync", spy)
    monkeypatch.setenv("SUBSYNC_DATA_DIR", str(tmp_path / "data"))

    cli_module.main(_sync_args(exports, "--dry-run"))

    assert captured["publisher"] is None
    assert captured["push_updates"] is False
    assert not (tmp_path / "data").exists()


def test_cli_rejects_push_with_dry_run(exports: tuple[Path, Path, Path]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(_sync_args(exports, "--dry-run", "--push-updates"))

    assert excinfo.value.code == 2


def test_cli_rejects_missing_export(tmp_path: Path, exports: tuple[Path, Path, Path]) -> None:
    _people, payments, _roles = exports

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync", "--people", str(tmp_path / "nope.csv"), "--payments", str(payments)])

    assert excinfo.value.code == 2


def test_cli_failure_exits_with_code_one(
    monkeypatch: pytest.MonkeyPatch, exports: tuple[Path, Path, Path]
) -> None:
    def broken(**_: object) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "run_member_sync", broken)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(_sync_args(exports, "--dry-run"))

    assert excinfo.value.code == 1


def test_cli_verbose_switches_to_debug(
    monkeypatch: pytest.MonkeyPatch, exports: tuple[Path, Path, Path]
) -> None:
    levels: list[int] = []

    def fake_configure(*, level: int = logging.INFO, force: bool = False) -> None:
        del force
        levels.append(level)

    monkeypatch.setattr(cli_module, "configure_logging", fake_configure)

    cli_module.main(_sync_args(exports, "--dry-run", "--verbose"))

    assert levels == [logging.INFO, logging.DEBUG]


def test_sigint_handler_exits_cleanly() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.sigint_handler(2, None)

    assert excinfo.value.code == 0
