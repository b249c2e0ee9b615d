"""Read the platform's CSV exports into canonical source records."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import pandas as pd
from pydantic import ValidationError

from subsync.domain.ports.fetching import MemberExport, MemberExportSource

from .translator import parse_member, parse_payment

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


class ExportReadError(RuntimeError):
    """Raised when an export file is missing, unreadable or malformed."""


def read_export_rows(path: Path) -> list[dict[str, str]]:
    """Return every data row of a CSV export keyed by its stripped header.

    Cells are read as text; blanks stay blank rather than becoming NaN.
    """
    try:
        frame = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            skip_blank_lines=True,
        )
    except FileNotFoundError as exc:
        raise ExportReadError(f"Export file not found: {path}") from exc
    except pd.errors.EmptyDataError:
        log.warning("Export %s is empty", path)
        return []
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise ExportReadError(f"Cannot parse export {path}: {exc}") from exc

    frame.columns = [str(column).strip() for column in frame.columns]
    rows: list[dict[str, str]] = frame.to_dict(orient="records")  # pyright: ignore[reportAssignmentType]
    log.debug("Read %s rows from %s", len(rows), path)
    return rows


@dataclass(frozen=True, slots=True)
class UscreenCsvExport:
    """People and Sales CSV exports read together as one member snapshot."""

    people_path: Path
    payments_path: Path

    def __call__(self) -> MemberExport:
        try:
            members = [parse_member(row) for row in read_export_rows(self.people_path)]
            payments = [parse_payment(row) for row in read_export_rows(self.payments_path)]
        except ValidationError as exc:
            raise ExportReadError(f"Unexpected export row: {exc}") from exc
        log.info(
            "Loaded %s members and %s payments from platform exports",
            len(members),
            len(payments),
        )
        return MemberExport(members=members, payments=payments)


if TYPE_CHECKING:
    _source_check: MemberExportSource = UscreenCsvExport(Path(), Path())
