"""Classifier for the reconciliation subsystem.

``reconcile`` is a pure function of three snapshots. It builds the target and
payment indices once, then walks the members in input order:

1) resolve the member against the target indices
2) matched members are checked for cancellation and payment freshness
3) unmatched members split on lifetime value into new users and no-match
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from subsync.domain.canonical import identity_text, normalize_email, normalize_text, to_instant

from .contracts import (
    CancelledMember,
    MatchedMember,
    NewUser,
    PaymentUpdate,
    ReconciliationInputError,
    ReconciliationResult,
    UnmatchedMember,
)
from .identity import build_indices, match_member_with_key
from .payments import PaymentIndex, latest_qualifying_payment, needs_update
from .status import is_cancelled

if TYPE_CHECKING:
    from subsync.domain.model import SourceMember, SourcePayment, TargetRecord

log = logging.getLogger(__name__)


def reconcile(
    members: Iterable[SourceMember],
    payments: Iterable[SourcePayment],
    targets: Iterable[TargetRecord],
) -> ReconciliationResult:
    """Partition ``members`` into result buckets against ``targets``."""

    member_list = _materialize("members", members)
    payment_list = _materialize("payments", payments)
    target_list = _materialize("targets", targets)

    indices = build_indices(target_list)
    payment_index = PaymentIndex.build(payment_list)

    matched: list[MatchedMember] = []
    updates: list[PaymentUpdate] = []
    new_users: list[NewUser] = []
    cancelled: list[CancelledMember] = []
    no_match: list[UnmatchedMember] = []

    for member in member_list:
        external_id = identity_text(member.external_id)
        email = normalize_email(member.email)
        target, key = match_member_with_key(member, indices)

        if target is None:
            if member.lifetime_value > 0:
                new_users.append(
                    NewUser(
                        member=member,
                        external_id=external_id,
                        email=email,
                        lifetime_value=member.lifetime_value,
                        status=normalize_text(member.status),
                    )
                )
            else:
                no_match.append(UnmatchedMember(member=member, external_id=external_id, email=email))
            continue

        log.debug("Matched member %r to target %s by %s", external_id or email, target.target_id, key)
        match = MatchedMember(member=member, target=target, external_id=external_id, email=email)
        matched.append(match)

        if is_cancelled(member):
            cancelled.append(CancelledMember(match=match, previous_status=target.status))

        latest = latest_qualifying_payment(member, payment_index)
        if latest is not None and needs_update(member, target, latest):
            updates.append(
                PaymentUpdate(
                    match=match,
                    latest_payment=latest,
                    target_last_payment=target.last_payment_date,
                    source_last_payment=to_instant(latest.charged_at),
                )
            )

    result = ReconciliationResult(
        matched=tuple(matched),
        needs_update=tuple(updates),
        new_users=tuple(new_users),
        cancelled=tuple(cancelled),
        no_match=tuple(no_match),
    )
    log.info(
        "Reconciled %s members against %s targets: %s",
        len(member_list),
        len(target_list),
        ", ".join(f"{name}={count}" for name, count in result.summary().items()),
    )
    return result


def _materialize[T](name: str, values: Iterable[T] | None) -> tuple[T, ...]:
    if values is None:
        raise ReconciliationInputError(f"Missing required input collection: {name}")
    if isinstance(values, str | bytes) or not isinstance(values, Iterable):
        raise ReconciliationInputError(
            f"Input collection {name} must be iterable, got {type(values).__name__}"
        )
    return tuple(values)
