from __future__ import annotations

import pytest

from ledger_cli.ledger_mt940.amounts import amount_to_cents
from ledger_cli.ledger_mt940.types import Balance
from ledger_cli.shared.exceptions import MalformedRecordError


@pytest.mark.parametrize(
    "amount, cents",
    [("-1234.56", -123456), ("2256.40", 225640), ("0.05", 5), ("", 0), ("1 000.00", 100000)],
)
def test_amount_to_cents(amount: str, cents: int) -> None:
    assert amount_to_cents(amount) == cents


@pytest.mark.parametrize(
    "amount",
    ["12.5", "1.234", "10", "1.2.3", "abc", "1e3", "1.00e2", "Infinity", "NaN", "+1.00"],
)
def test_amount_to_cents_rejects_bad_amounts(amount: str) -> None:
    with pytest.raises(MalformedRecordError):
        amount_to_cents(amount)


def test_amount_to_cents_reports_extra_separators() -> None:
    with pytest.raises(MalformedRecordError, match="Too many decimal separators"):
        amount_to_cents("1.000.00")


def test_balance_cents() -> None:
    assert Balance(amount="-200.50", currency="PLN", date="240630").cents() == -20050
    assert Balance(amount="", currency="PLN", date="240630").cents() == 0


def test_balance_cents_requires_two_decimal_places() -> None:
    with pytest.raises(MalformedRecordError, match="Expected 2 decimal places"):
        Balance(amount="12.5", currency="PLN", date="240630").cents()
