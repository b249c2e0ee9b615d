"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from subsync.adapters.salesforce import SalesforceTargetFetcher, SalesforceTargetUpdater
from subsync.domain.reconciliation import plan_target_updates, reconcile

if TYPE_CHECKING:
    from subsync.domain.ports.fetching import MemberExportSource, TargetRecordFetcher
    from subsync.domain.ports.publishing import (
        ResultPublisher,
        TargetUpdate,
        TargetUpdater,
        UpdateOutcome,
    )
    from subsync.domain.reconciliation import ReconciliationResult

Clock = Callable[[], datetime]

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, kw_only=True)
class SyncReport:
    """What one member sync run found and did."""

    synced_at: datetime
    result: ReconciliationResult
    updates: list[TargetUpdate] = field(default_factory=list)
    outcome: UpdateOutcome | None = None
    published: bool = False


def run_member_sync(
    *,
    source: MemberExportSource,
    targets: TargetRecordFetcher | None = None,
    publisher: ResultPublisher | None = None,
    updater: TargetUpdater | None = None,
    push_updates: bool = False,
    clock: Clock = _utcnow,
) -> SyncReport:
    """Reconcile the platform export against the CRM and act on the result.

    The report is published whenever ``publisher`` is given. Planned updates
    are only written back when ``push_updates`` is set.
    """

    synced_at = clock()
    effective_targets = targets or SalesforceTargetFetcher()
    log.info("Starting member sync at %s (push_updates=%s)", synced_at.isoformat(), push_updates)

    export = source()
    target_records = effective_targets()
    log.info(
        "Fetched %s members, %s payments, %s target records",
        len(export.members),
        len(export.payments),
        len(target_records),
    )

    result = reconcile(export.members, export.payments, target_records)
    updates = plan_target_updates(result)
    report = SyncReport(synced_at=synced_at, result=result, updates=updates)

    if publisher is not None:
        publisher(result, export=export, targets=target_records, synced_at=synced_at)
        report.published = True

    if push_updates:
        effective_updater = updater or SalesforceTargetUpdater()
        log.info("Pushing %s target updates", len(updates))
        report.outcome = effective_updater(updates)
        if report.outcome.failures:
            log.warning(
                "%s of %s target updates failed",
                len(report.outcome.failures),
                report.outcome.attempted,
            )
    elif updates:
        log.info("%s target updates planned; not pushed", len(updates))

    summary = result.summary()
    log.info(
        f"Finished member sync: matched={summary['matched']}, "
        f"needs_update={summary['needs_update']}, new_users={summary['new_users']}, "
        f"cancelled={summary['cancelled']}, no_match={summary['no_match']}"
    )
    return report
