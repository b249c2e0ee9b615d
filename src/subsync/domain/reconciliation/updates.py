"""Turn a reconciliation result into CRM write-back instructions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from subsync.domain.ports.publishing import TargetUpdate

from .contracts import CANCELLED_STATUS

if TYPE_CHECKING:
    from datetime import date

    from .contracts import ReconciliationResult


def plan_target_updates(
    result: ReconciliationResult,
    *,
    cancelled_status: str = CANCELLED_STATUS,
) -> list[TargetUpdate]:
    """Merge payment refreshes and cancellations into one update per target.

    Targets are ordered by their first appearance in ``result.matched``. When
    several members resolve to the same target, the latest payment date wins.
    """

    payment_dates: dict[str, date] = {}
    for update in result.needs_update:
        target_id = update.match.target.target_id
        charged_on = update.source_last_payment.date()
        current = payment_dates.get(target_id)
        if current is None or charged_on > current:
            payment_dates[target_id] = charged_on

    cancelled_ids = {entry.match.target.target_id for entry in result.cancelled}

    planned: dict[str, TargetUpdate] = {}
    for match in result.matched:
        target_id = match.target.target_id
        if target_id in planned:
            continue
        update = TargetUpdate(
            target_id=target_id,
            last_payment_date=payment_dates.get(target_id),
            status=cancelled_status if target_id in cancelled_ids else None,
        )
        if not update.is_empty:
            planned[target_id] = update
    return list(planned.values())
