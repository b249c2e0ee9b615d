"""Identity resolution between source members and CRM records.

Matching policy:
- the external id index is consulted first; a hit ends the lookup
- the lowercased email index is the fallback, and only for non-empty emails
- blank keys are never indexed, so they can't act as wildcards

Duplicate keys among target records are last-write-wins: a later record in
iteration order replaces the earlier index entry. Overwrites are logged at
DEBUG level and are not treated as errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from subsync.domain.canonical import identity_text, normalize_email

from .contracts import MatchKey

if TYPE_CHECKING:
    from collections.abc import Iterable

    from subsync.domain.model import SourceMember, TargetRecord

log = logging.getLogger(__name__)


@dataclass(slots=True)
class TargetIndices:
    """Lookup tables over target records keyed by canonical id and email."""

    by_external_id: dict[str, TargetRecord] = field(default_factory=dict)
    by_email: dict[str, TargetRecord] = field(default_factory=dict)

    def add(self, target: TargetRecord) -> None:
        external_id = identity_text(target.external_id)
        if external_id:
            _put(self.by_external_id, external_id, target, index_name=MatchKey.EXTERNAL_ID)
        email = normalize_email(target.contact_email)
        if email:
            _put(self.by_email, email, target, index_name=MatchKey.EMAIL)


def build_indices(targets: Iterable[TargetRecord]) -> TargetIndices:
    indices = TargetIndices()
    for target in targets:
        indices.add(target)
    log.debug(
        "Indexed targets: by_external_id=%s, by_email=%s",
        len(indices.by_external_id),
        len(indices.by_email),
    )
    return indices


def match_member(member: SourceMember, indices: TargetIndices) -> TargetRecord | None:
    """Return the target record for ``member``, or ``None``."""

    target, _key = match_member_with_key(member, indices)
    return target


def match_member_with_key(
    member: SourceMember,
    indices: TargetIndices,
) -> tuple[TargetRecord | None, MatchKey | None]:
    external_id = identity_text(member.external_id)
    if external_id:
        target = indices.by_external_id.get(external_id)
        if target is not None:
            return target, MatchKey.EXTERNAL_ID

    email = normalize_email(member.email)
    if email:
        target = indices.by_email.get(email)
        if target is not None:
            return target, MatchKey.EMAIL

    return None, None


def _put(
    index: dict[str, TargetRecord],
    key: str,
    target: TargetRecord,
    *,
    index_name: MatchKey,
) -> None:
    previous = index.get(key)
    if previous is not None and previous is not target:
        log.debug(
            "Duplicate %s key %r: target %s replaces %s",
            index_name,
            key,
            target.target_id,
            previous.target_id,
        )
    index[key] = target
