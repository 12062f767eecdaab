from __future__ import annotations

import logging

from ledger_cli.ledger_mt940.dispatcher import ScanState, StatementDispatcher


def test_state_follows_tags() -> None:
    dispatcher = StatementDispatcher()
    assert dispatcher.state is ScanState.IDLE

    dispatcher.feed(":20:MT940")
    assert dispatcher.state is ScanState.IDLE

    dispatcher.feed(":61:2406010601C5,00S0341")
    assert dispatcher.state is ScanState.TRANSACTION

    dispatcher.feed("KURS 4,00")
    assert dispatcher.state is ScanState.TRANSACTION

    dispatcher.feed(":86:034")
    assert dispatcher.state is ScanState.DETAILS

    dispatcher.feed("~20continued")
    assert dispatcher.state is ScanState.DETAILS

    dispatcher.feed(":62F:C240630PLN15,00")
    assert dispatcher.state is ScanState.IDLE

    dispatcher.finish()
    assert dispatcher.state is ScanState.IDLE


def test_continuation_lines_extend_details_block() -> None:
    dispatcher = StatementDispatcher()
    dispatcher.feed_all(
        [
            ":61:2406010601C5,00S0341",
            ":86:034",
            ":86:~20First",
            "~21 second",
            ":86:~32Name",
        ]
    )

    (txn,) = dispatcher.finish().transactions
    assert txn.raw_summary == "034"
    assert txn.raw_details == "~20First~21 second~32Name"
    assert txn.title == "First  second"
    assert txn.name == "Name"


def test_untagged_line_before_description_goes_to_details() -> None:
    dispatcher = StatementDispatcher()
    dispatcher.feed_all([":61:2406010601C5,00S0341", "~20Loose"])

    (txn,) = dispatcher.finish().transactions
    assert txn.raw_summary == ""
    assert txn.title == "Loose"
    assert txn.issues == ()


def test_idle_lines_are_ignored(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="ledger_cli")
    dispatcher = StatementDispatcher()
    dispatcher.feed_all(
        [
            "{1:F01INGBPLPWAXXX}",
            ":20:MT940",
            ":61:2406010601C5,00S0341",
            ":86:034",
            ":86:~20Title",
            ":62F:C240630PLN15,00",
            "-}",
        ]
    )

    (txn,) = dispatcher.finish().transactions
    assert txn.raw_details == "~20Title"
    assert "Untagged line outside a transaction ignored" in caplog.text


def test_description_and_rate_without_transaction_are_ignored() -> None:
    dispatcher = StatementDispatcher()
    dispatcher.feed_all([":20:MT940", ":86:orphan", "KURS 1,00"])

    statement = dispatcher.finish()
    assert statement.transactions == ()


def test_blank_lines_do_not_change_state() -> None:
    dispatcher = StatementDispatcher()
    dispatcher.feed(":61:2406010601C5,00S0341")
    dispatcher.feed("")

    assert dispatcher.state is ScanState.TRANSACTION


def test_account_tag_drops_leading_slash() -> None:
    dispatcher = StatementDispatcher()
    dispatcher.feed_all([":25:/PL27105010381000009876543210", ":28C:7"])

    statement = dispatcher.finish()
    assert statement.account_iban == "PL27105010381000009876543210"
    assert statement.statement_no == "7"
    assert statement.label().startswith("PL27105010381000009876543210 #7")


def test_statement_level_description_does_not_extend_last_transaction(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="ledger_cli")
    dispatcher = StatementDispatcher()
    dispatcher.feed_all(
        [
            ":20:MT940",
            ":61:2406010601C5,00S0341",
            ":86:034",
            ":86:~20Title",
            ":62F:C240630PLN15,00",
            ":86:Statement footer",
            "~20Footer continued",
            "KURS 9,99",
        ]
    )

    assert dispatcher.state is ScanState.IDLE
    (txn,) = dispatcher.finish().transactions
    assert txn.raw_summary == "034"
    assert txn.raw_details == "~20Title"
    assert txn.exchange_rate == ""
    assert "Description outside a transaction ignored" in caplog.text


def test_nul_characters_are_stripped_with_a_warning(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="ledger_cli")
    dispatcher = StatementDispatcher()
    dispatcher.feed_all([":61:2406010601C5,00S0341", ":86:034", ":86:~20Zwrot\x00~32Jan"])

    (txn,) = dispatcher.finish().transactions
    assert txn.raw_details == "~20Zwrot~32Jan"
    assert txn.title == "Zwrot"
    assert "Dropping NUL characters" in caplog.text
