"""Reconciliation core between the subscription ledger and the CRM.

Flow:
1) index target records by external id and by normalized email
2) resolve every source member against those indices
3) check matched members for cancellation and for newer payments
4) classify the full member population into result buckets
"""

from __future__ import annotations

from .contracts import (
    CancelledMember,
    MatchedMember,
    MatchKey,
    NewUser,
    PaymentUpdate,
    ReconciliationInputError,
    ReconciliationResult,
    UnmatchedMember,
)
from .engine import reconcile
from .identity import TargetIndices, build_indices, match_member
from .payments import PaymentIndex, latest_qualifying_payment, needs_update
from .status import is_cancelled
from .updates import plan_target_updates

__all__ = [
    "CancelledMember",
    "MatchKey",
    "MatchedMember",
    "NewUser",
    "PaymentIndex",
    "PaymentUpdate",
    "ReconciliationInputError",
    "ReconciliationResult",
    "TargetIndices",
    "UnmatchedMember",
    "build_indices",
    "is_cancelled",
    "latest_qualifying_payment",
    "match_member",
    "needs_update",
    "plan_target_updates",
    "reconcile",
]
