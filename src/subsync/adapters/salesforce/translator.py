"""Translate Salesforce program-role payloads to and from domain records."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Final

from subsync.domain.canonical import normalize_email, parse_date
from subsync.domain.model import TargetRecord

from .schema import ProgramRolePayload

if TYPE_CHECKING:
    from subsync.domain.ports.publishing import TargetUpdate

log = getLogger(__name__)

PROGRAM_ROLE_OBJECT: Final[str] = "Program_Roles__c"
LAST_PAYMENT_DATE_FIELD: Final[str] = "Uscreen_Last_Payment_Date__c"
SUBSCRIPTION_STATUS_FIELD: Final[str] = "Uscreen_Subscription_Status__c"

type ProgramRoleInput = ProgramRolePayload | Mapping[str, object]


def _ensure_payload(record: ProgramRoleInput) -> ProgramRolePayload:
    if isinstance(record, ProgramRolePayload):
        return record
    return ProgramRolePayload.model_validate(record)


def parse_target_record(record: ProgramRoleInput) -> TargetRecord:
    payload = _ensure_payload(record)
    last_payment = parse_date(payload.uscreen_last_payment_date)
    if payload.uscreen_last_payment_date and last_payment is None:
        log.debug(
            "Unparseable last payment date %r on %s",
            payload.uscreen_last_payment_date,
            payload.id,
        )
    return TargetRecord(
        target_id=payload.id,
        external_id=payload.uscreen_member_id or "",
        contact_email=normalize_email(payload.contact_email),
        status=payload.uscreen_subscription_status or "",
        last_payment_date=last_payment,
        name=payload.name or "",
        contact_name=payload.contact_name or "",
        active=bool(payload.active),
    )


def to_program_role_record(update: TargetUpdate) -> dict[str, object]:
    """Render ``update`` as one entry of a composite sObject collection request."""

    record: dict[str, object] = {
        "attributes": {"type": PROGRAM_ROLE_OBJECT},
        "id": update.target_id,
    }
    if update.last_payment_date is not None:
        record[LAST_PAYMENT_DATE_FIELD] = update.last_payment_date.isoformat()
    if update.status is not None:
        record[SUBSCRIPTION_STATUS_FIELD] = update.status
    return record
