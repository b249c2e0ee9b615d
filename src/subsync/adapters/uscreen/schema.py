"""Pydantic models describing rows of the platform's People and Sales exports.

The exports have shipped with several header spellings over time (``User ID``
versus ``user_id``, ``Charge Amount`` versus ``amount``). Each model field
lists its accepted headers in order, followed by the field name itself; the
first non-blank value wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar, cast

from pydantic import BaseModel, ConfigDict, model_validator

from subsync.domain.canonical import identity_text


def _coalesce(value: object, aliases: Mapping[str, tuple[str, ...]]) -> object:
    if not isinstance(value, Mapping):
        return value
    row = cast(Mapping[str, object], value)
    data: dict[str, str] = {}
    for field_name, headers in aliases.items():
        for header in (*headers, field_name):
            text = identity_text(row.get(header))
            if text:
                data[field_name] = text
                break
    return data


class ExportRow(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    header_aliases: ClassVar[Mapping[str, tuple[str, ...]]] = {}

    @model_validator(mode="before")
    @classmethod
    def _coalesce_headers(cls, value: object) -> object:
        return _coalesce(value, cls.header_aliases)


class PersonRow(ExportRow):
    header_aliases: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "external_id": ("User ID", "user_id", "id"),
        "email": ("User email", "email", "Email"),
        "status": ("Status", "status"),
        "lifetime": ("Lifetime", "lifetime"),
        "segment": ("Segment", "segment"),
        "name": ("User Name", "name", "Name"),
        "created_on": ("Created on date", "created_date"),
    }

    external_id: str = ""
    email: str = ""
    status: str = ""
    lifetime: str = ""
    segment: str = ""
    name: str = ""
    created_on: str = ""


class PaymentRow(ExportRow):
    header_aliases: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "email": ("Email", "email"),
        "user_id": ("User ID", "user_id"),
        "amount": ("Charge Amount", "charge_amount", "amount"),
        "charge_date": ("Charge Date", "charge_date"),
        "subscription": ("Subscription", "subscription"),
        "payment_id": ("Payment ID", "payment_id"),
        "name": ("Name", "name"),
        "coupon": ("Coupon", "coupon"),
    }

    email: str = ""
    user_id: str = ""
    amount: str = ""
    charge_date: str = ""
    subscription: str = ""
    payment_id: str = ""
    name: str = ""
    coupon: str = ""


type PersonRowInput = PersonRow | Mapping[str, object]
type PaymentRowInput = PaymentRow | Mapping[str, object]
