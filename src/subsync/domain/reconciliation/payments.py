"""Payment freshness: latest qualifying charge versus the CRM's last payment date.

A payment qualifies for a member when its amount is strictly positive and it
shares the member's normalized email or textual external id. Among qualifying
payments the latest charge instant wins; payments without a usable date sort
before every dated one but can still win when they are the only candidate.
Ties keep the payment that came first in the export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING

from subsync.domain.canonical import identity_text, normalize_email, to_instant

if TYPE_CHECKING:
    from collections.abc import Iterable

    from subsync.domain.model import SourceMember, SourcePayment, TargetRecord


type _Positioned = tuple[int, SourcePayment]


@dataclass(slots=True)
class PaymentIndex:
    """Qualifying payments grouped by member email and by member external id.

    Built once per run so that looking up a member does not rescan the
    whole payment export.
    """

    by_email: dict[str, list[_Positioned]] = field(default_factory=dict)
    by_external_id: dict[str, list[_Positioned]] = field(default_factory=dict)

    @classmethod
    def build(cls, payments: Iterable[SourcePayment]) -> PaymentIndex:
        index = cls()
        for position, payment in enumerate(payments):
            if not is_qualifying_amount(payment):
                continue
            entry = (position, payment)
            email = normalize_email(payment.member_email)
            if email:
                index.by_email.setdefault(email, []).append(entry)
            external_id = identity_text(payment.member_external_id)
            if external_id:
                index.by_external_id.setdefault(external_id, []).append(entry)
        return index

    def candidates_for(self, member: SourceMember) -> list[_Positioned]:
        """Qualifying payments for ``member`` in export order, without duplicates."""

        found: dict[int, SourcePayment] = {}
        email = normalize_email(member.email)
        if email:
            found.update(self.by_email.get(email, ()))
        external_id = identity_text(member.external_id)
        if external_id:
            found.update(self.by_external_id.get(external_id, ()))
        return sorted(found.items(), key=lambda item: item[0])


def is_qualifying_amount(payment: SourcePayment) -> bool:
    return payment.amount > 0


def latest_qualifying_payment(
    member: SourceMember,
    payments: PaymentIndex | Iterable[SourcePayment],
) -> SourcePayment | None:
    index = payments if isinstance(payments, PaymentIndex) else PaymentIndex.build(payments)
    latest: SourcePayment | None = None
    for _position, payment in index.candidates_for(member):
        # strict comparison keeps the first of equally dated payments
        if latest is None or to_instant(payment.charged_at) > to_instant(latest.charged_at):
            latest = payment
    return latest


def needs_update(
    member: SourceMember,  # noqa: ARG001
    target: TargetRecord,
    latest_payment: SourcePayment | None,
) -> bool:
    """Return ``True`` when the source holds a charge newer than the CRM's record.

    The CRM stores calendar dates, so a plain-date record is compared against the
    charge's UTC date: a charge later on the recorded day is already synced. A
    missing CRM date is earliest-possible, which means any dated payment is newer
    and an undated one is not.
    """

    if latest_payment is None:
        return False
    charged = to_instant(latest_payment.charged_at)
    recorded = target.last_payment_date
    if isinstance(recorded, date) and not isinstance(recorded, datetime):
        return charged.date() > recorded
    return charged > to_instant(recorded)
