"""Translate export rows into canonical source records."""

from __future__ import annotations

from logging import getLogger

from subsync.domain.canonical import parse_amount, parse_instant
from subsync.domain.model import SourceMember, SourcePayment

from .schema import PaymentRow, PaymentRowInput, PersonRow, PersonRowInput

log = getLogger(__name__)


def _ensure_person_row(row: PersonRowInput) -> PersonRow:
    if isinstance(row, PersonRow):
        return row
    return PersonRow.model_validate(row)


def _ensure_payment_row(row: PaymentRowInput) -> PaymentRow:
    if isinstance(row, PaymentRow):
        return row
    return PaymentRow.model_validate(row)


def parse_member(row: PersonRowInput) -> SourceMember:
    person = _ensure_person_row(row)
    return SourceMember(
        external_id=person.external_id,
        email=person.email,
        status=person.status,
        segment=person.segment,
        lifetime_value=parse_amount(person.lifetime),
        name=person.name,
        created_on=person.created_on,
    )


def parse_payment(row: PaymentRowInput) -> SourcePayment:
    payment = _ensure_payment_row(row)
    charged_at = parse_instant(payment.charge_date)
    if payment.charge_date and charged_at is None:
        log.debug(
            "Unparseable charge date %r on payment %s",
            payment.charge_date,
            payment.payment_id or "<no id>",
        )
    return SourcePayment(
        member_email=payment.email,
        member_external_id=payment.user_id,
        amount=parse_amount(payment.amount),
        charged_at=charged_at,
        payment_id=payment.payment_id,
        subscription=payment.subscription,
        member_name=payment.name,
        coupon=payment.coupon,
    )
