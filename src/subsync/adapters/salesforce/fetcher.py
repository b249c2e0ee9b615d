"""Synchronous port implementations backed by the Salesforce client."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from subsync.config.salesforce import get_salesforce_config
from subsync.domain.ports.fetching import TargetRecordFetcher
from subsync.domain.ports.publishing import TargetUpdater, UpdateFailure, UpdateOutcome

from .client import SalesforceClient
from .schema import SavedQueryFile
from .translator import parse_target_record, to_program_role_record

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from subsync.domain.model import TargetRecord
    from subsync.domain.ports.publishing import TargetUpdate

log = getLogger(__name__)


class ProgramRoleFileError(RuntimeError):
    """Raised when a saved program-role file cannot be read or validated."""


def _default_salesforce_client() -> SalesforceClient:
    return SalesforceClient(config=get_salesforce_config())


@dataclass(slots=True)
class SalesforceTargetFetcher:
    """Fetch every program role carrying a platform member id."""

    client: SalesforceClient = field(default_factory=_default_salesforce_client)

    def __call__(self) -> list[TargetRecord]:
        return asyncio.run(self._fetch_async())

    async def _fetch_async(self) -> list[TargetRecord]:
        async with self.client.open() as http:
            session = await self.client.login(http)
            payloads = await self.client.query_all(http, session)
        records = [parse_target_record(payload) for payload in payloads]
        log.info("Fetched %s Salesforce program roles", len(records))
        return records


@dataclass(slots=True)
class SalesforceTargetUpdater:
    """Write planned updates back onto program roles via composite requests."""

    client: SalesforceClient = field(default_factory=_default_salesforce_client)

    def __call__(self, updates: Sequence[TargetUpdate]) -> UpdateOutcome:
        if not updates:
            return UpdateOutcome()
        return asyncio.run(self._update_async(updates))

    async def _update_async(self, updates: Sequence[TargetUpdate]) -> UpdateOutcome:
        records = [to_program_role_record(update) for update in updates]
        async with self.client.open() as http:
            session = await self.client.login(http)
            results = await self.client.update_records(http, session, records)

        outcome = UpdateOutcome(attempted=len(records))
        for update, result in zip(updates, results, strict=False):
            if result.success:
                outcome.succeeded += 1
                continue
            message = "; ".join(error.message for error in result.errors) or "unknown error"
            log.warning("Update of %s failed: %s", update.target_id, message)
            outcome.failures.append(UpdateFailure(target_id=update.target_id, message=message))
        if len(results) < len(records):
            for update in updates[len(results) :]:
                outcome.failures.append(
                    UpdateFailure(target_id=update.target_id, message="no result returned")
                )
        return outcome


@dataclass(frozen=True, slots=True)
class JsonTargetRecordFile:
    """Read program roles from a saved query response for offline runs."""

    path: Path

    def __call__(self) -> list[TargetRecord]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ProgramRoleFileError(f"Cannot read saved program roles from {self.path}") from exc

        payload = {"records": raw} if isinstance(raw, list) else raw
        try:
            saved = SavedQueryFile.model_validate(payload)
        except ValidationError as exc:
            raise ProgramRoleFileError(f"Unexpected program role file {self.path}: {exc}") from exc

        records = [parse_target_record(record) for record in saved.records]
        log.info("Loaded %s program roles from %s", len(records), self.path)
        return records


if TYPE_CHECKING:
    _fetcher_check: TargetRecordFetcher = SalesforceTargetFetcher()
    _updater_check: TargetUpdater = SalesforceTargetUpdater()
