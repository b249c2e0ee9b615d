"""Cancellation detection from source status and segment text."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from subsync.domain.canonical import normalize_text

if TYPE_CHECKING:
    from subsync.domain.model import SourceMember

CANCELLED_STATUSES: Final[frozenset[str]] = frozenset({"cancelled", "churned"})
CHURNED_SEGMENT_MARKER: Final[str] = "churned"


def is_cancelled(member: SourceMember) -> bool:
    """Return ``True`` when the source marks ``member`` as cancelled or churned.

    Stateless: a member already reported on a previous run is reported again.
    """

    if normalize_text(member.status) in CANCELLED_STATUSES:
        return True
    return CHURNED_SEGMENT_MARKER in normalize_text(member.segment)
