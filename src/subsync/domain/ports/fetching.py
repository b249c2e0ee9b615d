"""Ports for fetching both sides of a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from subsync.domain.model import SourceMember, SourcePayment, TargetRecord


@dataclass(frozen=True, slots=True)
class MemberExport:
    """Snapshot of the subscription platform: accounts plus their charges."""

    members: Sequence[SourceMember] = field(default_factory=tuple)
    payments: Sequence[SourcePayment] = field(default_factory=tuple)


@runtime_checkable
class MemberExportSource(Protocol):
    """Callable port producing the source snapshot."""

    def __call__(self) -> MemberExport: ...


@runtime_checkable
class TargetRecordFetcher(Protocol):
    """Callable port producing every CRM record that may correspond to a member."""

    def __call__(self) -> list[TargetRecord]: ...


__all__ = ["MemberExport", "MemberExportSource", "TargetRecordFetcher"]
