from __future__ import annotations

from dataclasses import replace

from ledger_cli.ledger_mt940.decoder import decode_lines
from ledger_cli.ledger_mt940.types import Balance
from ledger_cli.ledger_mt940.validator import validate_statement


def test_sample_statement_reconciles(sample_lines: tuple[str, ...]) -> None:
    report = validate_statement(decode_lines(sample_lines), check_balances=True)

    assert report.ok
    assert report.issues == []


def test_balance_mismatch_is_an_error(sample_lines: tuple[str, ...]) -> None:
    statement = decode_lines(sample_lines)
    statement = replace(statement, closing=Balance(amount="2256.41", currency="PLN", date="240630"))

    report = validate_statement(statement, check_balances=True)

    assert not report.ok
    (issue,) = report.issues
    assert issue.code == "balance_mismatch"
    assert "1000.00" in issue.message
    assert "1256.40" in issue.message
    assert "2256.41" in issue.message


def test_balances_not_checked_by_default(sample_lines: tuple[str, ...]) -> None:
    statement = replace(
        decode_lines(sample_lines),
        closing=Balance(amount="0.00", currency="PLN", date="240630"),
    )

    assert validate_statement(statement).ok


def test_transaction_flags_become_warnings() -> None:
    statement = decode_lines(
        [
            ":20:MT940",
            ":60F:C240531PLN10,00",
            ":61:2406010601C5,00S0341",
            ":86:034",
            ":86:~20Zwrot~3405",
            ":62F:C240630PLN15,00",
        ]
    )

    report = validate_statement(statement, check_balances=True)

    assert report.ok
    assert [(issue.code, issue.severity) for issue in report.issues] == [
        ("sub_code_mismatch", "warning")
    ]


def test_missing_balances_and_duplicate_postings() -> None:
    statement = decode_lines(
        [
            ":61:2406010601C5,00S0341",
            ":86:034",
            ":61:2406010601C5,00S0341",
            ":86:034",
        ]
    )

    report = validate_statement(statement, check_balances=True)

    codes = [issue.code for issue in report.issues]
    assert codes == [
        "missing_opening_balance",
        "missing_closing_balance",
        "duplicate_digest",
        "balance_unchecked",
    ]
    assert report.ok


def test_unparseable_balance_is_an_error() -> None:
    statement = decode_lines(
        [
            ":20:MT940",
            ":60F:C240531PLNInfinity",
            ":61:2406010601C5,00S0341",
            ":86:034",
            ":62F:C240630PLN15,00",
        ]
    )

    report = validate_statement(statement, check_balances=True)

    assert not report.ok
    (issue,) = report.issues
    assert issue.code == "balance_unparseable"
    assert "Infinity" in issue.message
