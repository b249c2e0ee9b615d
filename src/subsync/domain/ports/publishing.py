"""Ports for consumers of a reconciliation result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime

    from subsync.domain.model import TargetRecord
    from subsync.domain.reconciliation.contracts import ReconciliationResult

    from .fetching import MemberExport


@dataclass(frozen=True, slots=True, kw_only=True)
class TargetUpdate:
    """Field changes to write back onto one CRM record.

    ``None`` means "leave unchanged".
    """

    target_id: str
    last_payment_date: date | None = None
    status: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.last_payment_date is None and self.status is None


@dataclass(frozen=True, slots=True)
class UpdateFailure:
    target_id: str
    message: str


@dataclass(slots=True)
class UpdateOutcome:
    """Per-record results of a write-back batch."""

    attempted: int = 0
    succeeded: int = 0
    failures: list[UpdateFailure] = field(default_factory=list)


@runtime_checkable
class ResultPublisher(Protocol):
    """Callable port that renders a result for human review."""

    def __call__(
        self,
        result: ReconciliationResult,
        *,
        export: MemberExport,
        targets: Sequence[TargetRecord],
        synced_at: datetime,
    ) -> None: ...


@runtime_checkable
class TargetUpdater(Protocol):
    """Callable port that writes planned updates back to the CRM."""

    def __call__(self, updates: Sequence[TargetUpdate]) -> UpdateOutcome: ...


__all__ = [
    "ResultPublisher",
    "TargetUpdate",
    "TargetUpdater",
    "UpdateFailure",
    "UpdateOutcome",
]
