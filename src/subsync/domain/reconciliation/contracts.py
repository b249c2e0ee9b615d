"""Result contracts for member reconciliation.

This module intentionally holds only:
- the per-member entries placed into result buckets
- the frozen ``ReconciliationResult`` aggregate
- the engine's single error kind
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import date, datetime

    from subsync.domain.model import SourceMember, SourcePayment, TargetRecord

CANCELLED_STATUS: Final[str] = "cancelled"
NO_MATCH_REASON: Final[str] = "no target match, zero lifetime value"


class ReconciliationInputError(TypeError):
    """Raised when a required input collection is missing or not iterable."""


class MatchKey(StrEnum):
    """Index that produced a member-to-target match."""

    EXTERNAL_ID = "external_id"
    EMAIL = "email"


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedMember:
    member: SourceMember
    target: TargetRecord
    external_id: str
    email: str


@dataclass(frozen=True, slots=True, kw_only=True)
class PaymentUpdate:
    """Matched member whose newest source charge is later than the CRM's record."""

    match: MatchedMember
    latest_payment: SourcePayment
    target_last_payment: date | datetime | None
    source_last_payment: datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class CancelledMember:
    match: MatchedMember
    previous_status: str
    new_status: str = CANCELLED_STATUS


@dataclass(frozen=True, slots=True, kw_only=True)
class NewUser:
    """Paying member with no CRM counterpart; needs a record created by hand."""

    member: SourceMember
    external_id: str
    email: str
    lifetime_value: float
    status: str


@dataclass(frozen=True, slots=True, kw_only=True)
class UnmatchedMember:
    member: SourceMember
    external_id: str
    email: str
    reason: str = NO_MATCH_REASON


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationResult:
    """Classification of the full source population for one run.

    Every member lands in exactly one of ``matched``, ``new_users`` or
    ``no_match``. ``needs_update`` and ``cancelled`` only ever hold matched
    members. All buckets keep the input order of the members.
    """

    matched: tuple[MatchedMember, ...] = ()
    needs_update: tuple[PaymentUpdate, ...] = ()
    new_users: tuple[NewUser, ...] = ()
    cancelled: tuple[CancelledMember, ...] = ()
    no_match: tuple[UnmatchedMember, ...] = ()

    def summary(self) -> dict[str, int]:
        return {
            "matched": len(self.matched),
            "needs_update": len(self.needs_update),
            "new_users": len(self.new_users),
            "cancelled": len(self.cancelled),
            "no_match": len(self.no_match),
        }


__all__ = [
    "CANCELLED_STATUS",
    "NO_MATCH_REASON",
    "CancelledMember",
    "MatchKey",
    "MatchedMember",
    "NewUser",
    "PaymentUpdate",
    "ReconciliationInputError",
    "ReconciliationResult",
    "UnmatchedMember",
]
