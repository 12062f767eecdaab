"""Field-level parsers for balance and transaction lines."""

from __future__ import annotations

import re

from ledger_cli.shared.exceptions import MalformedRecordError

from .types import Balance, PrimaryFields, SummaryFields

DEFAULT_CENTURY = "20"
EXCHANGE_RATE_PREFIX = "KURS"
DEBIT_MARKER = "D"
# Quote marks codes and ids as text for spreadsheet consumers.
TEXT_MARKER = "'"

_BALANCE_MIN_LENGTH = 10

_PRIMARY_RE = re.compile(
    r"^([0-9]{6})([0-9]{4})([CD])([0-9]{1,13},[0-9]{1,13})(S[0-9]{3})([0-9]{1,13})(.*)"
)
_SUMMARY_RE = re.compile(
    r"^([0-9]{3})([0-9a-zA-Z_/]{6})?([a-zA-Z]{3})?([0-9]{1,12},[0-9]{1,12})?(.*)"
)


def normalize_decimal(value: str) -> str:
    """Drop a leading exchange-rate prefix and turn a decimal comma into a point."""

    value = value.strip()
    if value.startswith(EXCHANGE_RATE_PREFIX):
        value = value[len(EXCHANGE_RATE_PREFIX) :].strip()
    return value.replace(",", ".")


def normalize_date(value: str, prefix: str | None = None, *, century: str = DEFAULT_CENTURY) -> str:
    """Expand ``MMDD``/``YYMMDD``/``YYYYMMDD`` into ``YYYY-MM-DD``.

    ``prefix`` supplies the year for four-digit dates and is usually taken from
    a sibling date; two-digit years get ``century`` prepended. Values of any
    other length come back trimmed but otherwise untouched.
    """

    value = value.strip()
    if len(value) == 4 and prefix:
        value = prefix + value
    if len(value) == 6:
        value = century + value
    if len(value) == 8:
        value = f"{value[0:4]}-{value[4:6]}-{value[6:8]}"
    return value


def mark_text(value: str) -> str:
    """Prefix a non-empty value with the text marker."""
    return TEXT_MARKER + value if value else ""


def parse_balance(payload: str) -> Balance:
    """Parse ``[D]YYMMDDCCYamount`` from a balance tag.

    The amount stays a string; only the sign and the decimal separator change.
    """

    if len(payload) < _BALANCE_MIN_LENGTH:
        raise MalformedRecordError(f"Balance payload too short: '{payload}'")
    sign = "-" if payload[0] == DEBIT_MARKER else ""
    date = payload[1:7]
    currency = payload[7:10]
    amount = payload[10:]
    if not date.isdigit() or len(currency) != 3:
        raise MalformedRecordError(f"Balance payload is not [D/C]YYMMDDCCY...: '{payload}'")
    return Balance(amount=sign + normalize_decimal(amount), currency=currency, date=date)


def parse_primary(text: str, *, century: str = DEFAULT_CENTURY) -> PrimaryFields:
    """Decompose the ``:61:`` payload; a non-matching line yields empty fields."""

    match = _PRIMARY_RE.match(text)
    if match is None:
        return PrimaryFields()
    value_raw, accounting_raw, marker, amount, code, txn_id, rest = match.groups()
    value_date = normalize_date(value_raw, century=century)
    accounting_date = normalize_date(accounting_raw, value_date[0:4], century=century)
    sign = "-" if marker == DEBIT_MARKER else ""
    return PrimaryFields(
        matched=True,
        value_date=value_date,
        accounting_date=accounting_date,
        accounting_month=accounting_date[0:7],
        amount=sign + normalize_decimal(amount),
        code=mark_text(code),
        transaction_id=mark_text(txn_id),
        remainder=rest,
    )


def parse_summary(text: str) -> SummaryFields:
    """Decompose the first ``:86:`` payload; optional groups may stay empty."""

    match = _SUMMARY_RE.match(text)
    if match is None:
        return SummaryFields()
    sub_code, external_id, currency, currency_amount, rest = match.groups()
    return SummaryFields(
        matched=True,
        sub_code=mark_text(sub_code),
        external_id=mark_text(external_id or ""),
        currency=currency or "",
        currency_amount=normalize_decimal(currency_amount or ""),
        remainder=rest,
    )
