"""Canonical record shapes consumed by the reconciliation engine.

Adapters translate raw export rows and CRM payloads into these types before
anything reaches :mod:`subsync.domain.reconciliation`. The engine never looks
at alternate field spellings; it only applies the text canonicalization in
:mod:`subsync.domain.canonical` when comparing keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceMember:
    """One account on the subscription platform."""

    external_id: str = ""
    email: str = ""
    status: str = ""
    segment: str = ""
    lifetime_value: float = 0.0
    name: str = ""
    created_on: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class SourcePayment:
    """One charge from the platform's sales export.

    ``charged_at`` is ``None`` when the export carried no usable date; the
    engine orders such payments before every dated one.
    """

    member_email: str = ""
    member_external_id: str = ""
    amount: float = 0.0
    charged_at: datetime | None = None
    payment_id: str = ""
    subscription: str = ""
    member_name: str = ""
    coupon: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class TargetRecord:
    """One CRM relationship record (a Salesforce program role)."""

    target_id: str
    external_id: str = ""
    contact_email: str = ""
    status: str = ""
    last_payment_date: date | datetime | None = None
    name: str = ""
    contact_name: str = ""
    active: bool = False
