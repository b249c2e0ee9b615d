from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from subsync.adapters.uscreen import PaymentRow, PersonRow, parse_member, parse_payment


def test_person_row_coalesces_alternate_headers() -> None:
    row = PersonRow.model_validate(
        {"user_id": 7.0, "email": "b@y.com", "status": "Active", "lifetime": "12.5", "id": "ignored"}
    )

    assert row.external_id == "7"
    assert row.email == "b@y.com"
    assert row.status == "Active"
    assert row.lifetime == "12.5"


def test_first_non_blank_header_wins() -> None:
    row = PersonRow.model_validate({"User ID": "  ", "user_id": "", "id": "55"})

    assert row.external_id == "55"


def test_payment_row_reads_snake_case_export() -> None:
    row = PaymentRow.model_validate(
        {"email": "b@y.com", "charge_amount": "9.99", "charge_date": "2024-03-01", "user_id": "7"}
    )

    assert (row.email, row.amount, row.charge_date, row.user_id) == (
        "b@y.com",
        "9.99",
        "2024-03-01",
        "7",
    )


def test_parse_member_from_raw_mapping() -> None:
    member = parse_member(
        {"User ID": "7", "User email": "b@y.com", "Status": "active", "Lifetime": "$1,200.50"}
    )

    assert member.external_id == "7"
    assert member.lifetime_value == pytest.approx(1200.5)
    assert member.segment == ""


def test_parse_payment_logs_unparseable_date(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="subsync.adapters.uscreen.translator"):
        payment = parse_payment({"Email": "b@y.com", "Charge Date": "someday", "amount": "5"})

    assert payment.charged_at is None
    assert payment.amount == pytest.approx(5.0)
    assert any("Unparseable charge date" in record.getMessage() for record in caplog.records)


def test_out_of_range_charge_date_is_treated_as_undated() -> None:
    payment = parse_payment(
        {"User ID": "7", "Charge Amount": "5", "Charge Date": "0001-01-01T00:00:00+01:00"}
    )

    assert payment.charged_at is None
    assert payment.member_external_id == "7"


def test_parse_payment_from_validated_row() -> None:
    row = PaymentRow(email="b@y.com", amount="20", charge_date="2024-02-01T00:00:00Z")

    payment = parse_payment(row)

    assert payment.member_email == "b@y.com"
    assert payment.charged_at == datetime(2024, 2, 1, tzinfo=UTC)
