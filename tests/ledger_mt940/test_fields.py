from __future__ import annotations

import pytest

from ledger_cli.ledger_mt940.fields import (
    normalize_date,
    normalize_decimal,
    parse_balance,
    parse_primary,
    parse_summary,
)
from ledger_cli.ledger_mt940.types import Balance, PrimaryFields, SummaryFields
from ledger_cli.shared.exceptions import MalformedRecordError


@pytest.mark.parametrize(
    "raw, prefix, expected",
    [
        ("240601", None, "2024-06-01"),
        ("0601", "2024", "2024-06-01"),
        ("20240601", None, "2024-06-01"),
        (" 240601 ", None, "2024-06-01"),
        ("0601", None, "0601"),
        ("", None, ""),
    ],
)
def test_normalize_date(raw: str, prefix: str | None, expected: str) -> None:
    assert normalize_date(raw, prefix) == expected


def test_normalize_date_uses_configured_century() -> None:
    assert normalize_date("990101", century="19") == "1999-01-01"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("4,3100", "4.3100"),
        ("KURS 4,3100", "4.3100"),
        (" 1234,56 ", "1234.56"),
        ("", ""),
    ],
)
def test_normalize_decimal(raw: str, expected: str) -> None:
    assert normalize_decimal(raw) == expected


def test_parse_balance_debit() -> None:
    assert parse_balance("D240601USD1234,56") == Balance(
        amount="-1234.56", currency="USD", date="240601"
    )


def test_parse_balance_credit() -> None:
    assert parse_balance("C240630PLN2256,40") == Balance(
        amount="2256.40", currency="PLN", date="240630"
    )


@pytest.mark.parametrize("payload", ["", "C2406", "D240601PL", "CXXXXXXPLN1,00"])
def test_parse_balance_rejects_malformed_payload(payload: str) -> None:
    with pytest.raises(MalformedRecordError):
        parse_balance(payload)


def test_parse_primary_example() -> None:
    fields = parse_primary("2406010601D1234,56S202123456789rest")

    assert fields.matched is True
    assert fields.value_date == "2024-06-01"
    assert fields.accounting_date == "2024-06-01"
    assert fields.accounting_month == "2024-06"
    assert fields.amount == "-1234.56"
    assert fields.code == "'S202"
    assert fields.transaction_id == "'123456789"
    assert fields.remainder == "rest"


def test_parse_primary_takes_accounting_year_from_value_date() -> None:
    fields = parse_primary("2312290102C10,00S0341")

    assert fields.value_date == "2023-12-29"
    assert fields.accounting_date == "2023-01-02"
    assert fields.amount == "10.00"
    assert fields.remainder == ""


def test_parse_primary_non_match_leaves_fields_empty() -> None:
    assert parse_primary("NONSENSE") == PrimaryFields()


def test_parse_summary_with_cross_currency() -> None:
    fields = parse_summary("076EXT123EUR10,00 karta")

    assert fields == SummaryFields(
        matched=True,
        sub_code="'076",
        external_id="'EXT123",
        currency="EUR",
        currency_amount="10.00",
        remainder=" karta",
    )


def test_parse_summary_code_only() -> None:
    fields = parse_summary("073")

    assert fields.matched is True
    assert fields.sub_code == "'073"
    assert fields.external_id == ""
    assert fields.currency == ""
    assert fields.currency_amount == ""


def test_parse_summary_non_match() -> None:
    assert parse_summary("~00VE02") == SummaryFields()
