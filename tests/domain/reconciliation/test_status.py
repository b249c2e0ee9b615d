from __future__ import annotations

import pytest

from subsync.domain.reconciliation import is_cancelled
from tests.helpers.records import make_member


@pytest.mark.parametrize("status", ["cancelled", "Cancelled", " CHURNED "])
def test_cancelled_statuses(status: str) -> None:
    assert is_cancelled(make_member("1", status=status))


def test_churned_segment_marks_member_cancelled() -> None:
    assert is_cancelled(make_member("1", status="active", segment="Churned - 2024 Q1"))


@pytest.mark.parametrize(("status", "segment"), [("active", ""), ("", ""), ("paused", "vip")])
def test_active_members_are_not_cancelled(status: str, segment: str) -> None:
    assert not is_cancelled(make_member("1", status=status, segment=segment))
