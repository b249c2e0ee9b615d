from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from subsync.adapters.report import WorkbookReportPublisher
from subsync.adapters.salesforce import JsonTargetRecordFile
from subsync.adapters.uscreen import UscreenCsvExport
from subsync.app import run_member_sync
from subsync.config import configure_logging, get_storage_config

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from subsync.app import SyncReport
    from subsync.domain.ports.fetching import TargetRecordFetcher
    from subsync.domain.ports.publishing import ResultPublisher

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile platform members with Salesforce")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Compare member exports with Salesforce program roles")
    sync.add_argument(
        "--people",
        type=Path,
        required=True,
        help="Path to the People CSV export",
    )
    sync.add_argument(
        "--payments",
        type=Path,
        required=True,
        help="Path to the Sales CSV export",
    )
    sync.add_argument(
        "--targets-json",
        type=Path,
        help="Read program roles from a saved query response instead of Salesforce",
    )
    sync.add_argument(
        "--report",
        type=Path,
        help="Where to write the xlsx report (defaults to the data directory)",
    )
    sync.add_argument(
        "--push-updates",
        action="store_true",
        help="Write planned payment dates and cancellations back to Salesforce",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Reconcile and log the summary only; no report, no write-back",
    )
    sync.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    if args.push_updates and args.dry_run:
        raise ValueError("--push-updates cannot be combined with --dry-run")
    for option, path in (("--people", args.people), ("--payments", args.payments)):
        if not path.is_file():
            raise ValueError(f"{option} file not found: {path}")
    if args.targets_json is not None and not args.targets_json.is_file():
        raise ValueError(f"--targets-json file not found: {args.targets_json}")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _run_sync(
    args: argparse.Namespace,
    *,
    now_provider: Callable[[], datetime] = _utcnow,
) -> SyncReport:
    synced_at = now_provider()
    source = UscreenCsvExport(people_path=args.people, payments_path=args.payments)
    targets: TargetRecordFetcher | None = None
    if args.targets_json is not None:
        targets = JsonTargetRecordFile(args.targets_json)

    publisher: ResultPublisher | None = None
    if not args.dry_run:
        report_path = args.report or get_storage_config().report_path(synced_at)
        publisher = WorkbookReportPublisher(report_path)

    return run_member_sync(
        source=source,
        targets=targets,
        publisher=publisher,
        push_updates=args.push_updates,
        clock=lambda: synced_at,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    try:
        if parsed_args.command == "sync":
            report = _run_sync(parsed_args)
            if report.outcome is not None and report.outcome.failures:
                log.warning("Sync finished with %s failed updates", len(report.outcome.failures))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def entrypoint() -> None:
    """Console-script entry point: load `.env`, trap Ctrl+C, run."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    entrypoint()
