from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from subsync.adapters.salesforce import (
    JsonTargetRecordFile,
    ProgramRoleFileError,
    SalesforceTargetFetcher,
)
from subsync.config import MissingConfigurationError
from tests.helpers.salesforce import program_role

if TYPE_CHECKING:
    from pathlib import Path


def test_json_file_reads_bare_record_list(tmp_path: Path) -> None:
    path = tmp_path / "roles.json"
    path.write_text(json.dumps([program_role("a01"), program_role("a02", member_id="8")]))

    records = JsonTargetRecordFile(path)()

    assert [(record.target_id, record.external_id) for record in records] == [
        ("a01", "7"),
        ("a02", "8"),
    ]


def test_json_file_reads_saved_query_response(tmp_path: Path) -> None:
    path = tmp_path / "roles.json"
    path.write_text(json.dumps({"totalSize": 1, "done": True, "records": [program_role("a01")]}))

    records = JsonTargetRecordFile(path)()

    assert [record.target_id for record in records] == ["a01"]


def test_json_file_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(ProgramRoleFileError):
        JsonTargetRecordFile(tmp_path / "absent.json")()


@pytest.mark.parametrize("content", ["{not json", '{"rows": []}', '[{"Name": "no id"}]'])
def test_json_file_malformed_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "roles.json"
    path.write_text(content)

    with pytest.raises(ProgramRoleFileError):
        JsonTargetRecordFile(path)()


def test_default_fetcher_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SF_CLIENT_ID", "SF_CLIENT_SECRET", "SF_USERNAME", "SF_PASSWORD"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(MissingConfigurationError):
        SalesforceTargetFetcher()
