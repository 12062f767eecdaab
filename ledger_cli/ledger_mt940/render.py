"""Output rendering helpers for ledger-mt940."""

from __future__ import annotations

import csv
import json
import sys
from collections.abc import Iterable, Sequence
from typing import IO, Any

from rich import box
from rich.console import Console
from rich.table import Table

from .ledger import LedgerEntry
from .types import Balance, Statement
from .validator import ValidationReport

TRANSACTION_COLUMNS: tuple[str, ...] = (
    "accounting_month",
    "accounting_date",
    "value_date",
    "amount",
    "account_currency",
    "account_label",
    "code",
    "transaction_id",
    "exchange_rate",
    "sub_code",
    "external_id",
    "currency",
    "currency_amount",
    "details_code",
    "title",
    "reference",
    "nrb",
    "nrozl",
    "nrach",
    "name",
    "bic",
    "iban",
    "fee",
    "detail_sub_code",
    "detail_exchange_rate",
)

CSV_HEADER: tuple[str, ...] = (
    "fingerprint",
    "account_iban",
    "statement_no",
    *TRANSACTION_COLUMNS,
    "issues",
)


def entry_row(entry: LedgerEntry) -> dict[str, str]:
    txn = entry.transaction
    row = {
        "fingerprint": txn.fingerprint,
        "account_iban": entry.account_iban,
        "statement_no": entry.statement_no,
    }
    for column in TRANSACTION_COLUMNS:
        row[column] = getattr(txn, column)
    row["issues"] = ";".join(txn.issues)
    return row


def write_csv(entries: Iterable[LedgerEntry], stream: IO[str]) -> None:
    writer = csv.DictWriter(stream, fieldnames=list(CSV_HEADER))
    writer.writeheader()
    for entry in entries:
        writer.writerow(entry_row(entry))


def _balance_payload(balance: Balance | None) -> dict[str, str] | None:
    if balance is None:
        return None
    return {"amount": balance.amount, "currency": balance.currency, "date": balance.date}


def write_json(
    statements: Sequence[tuple[Statement, str]],
    entries: Iterable[LedgerEntry],
    stream: IO[str],
) -> None:
    """Write statement headers (with their source file hash) and ledger rows."""

    payload: dict[str, Any] = {
        "statements": [
            {
                "account_iban": statement.account_iban,
                "statement_no": statement.statement_no,
                "document_hash": document_hash,
                "opening": _balance_payload(statement.opening),
                "closing": _balance_payload(statement.closing),
                "available": _balance_payload(statement.available),
                "transaction_count": len(statement.transactions),
            }
            for statement, document_hash in statements
        ],
        "transactions": [
            {**entry_row(entry), "issues": list(entry.transaction.issues)} for entry in entries
        ],
    }
    json.dump(payload, stream, indent=2, ensure_ascii=False)
    stream.write("\n")


def render_statement(
    statement: Statement,
    report: ValidationReport,
    *,
    stream: IO[str] | None = None,
) -> None:
    """Print balances, transactions and findings as Rich tables."""

    console = Console(file=stream or sys.stdout, highlight=False, force_terminal=False)
    console.print(statement.label(), markup=False)

    balances = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    balances.add_column("Balance", style="bold")
    balances.add_column("Date")
    balances.add_column("Amount", justify="right")
    balances.add_column("Currency")
    for label, balance in (
        ("opening", statement.opening),
        ("closing", statement.closing),
        ("available", statement.available),
    ):
        if balance is None:
            balances.add_row(label, "-", "-", "-")
        else:
            balances.add_row(label, balance.date, balance.amount, balance.currency)
    console.print(balances)

    transactions = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    transactions.add_column("Date")
    transactions.add_column("Amount", justify="right")
    transactions.add_column("Counterparty")
    transactions.add_column("Title")
    transactions.add_column("Fingerprint")
    for txn in statement.transactions:
        transactions.add_row(
            txn.accounting_date,
            txn.amount,
            txn.name,
            txn.title,
            txn.fingerprint,
        )
    console.print(transactions)

    if not report.issues:
        console.print("No issues found.")
        return
    for issue in report.issues:
        console.print(f"[{issue.severity}] {issue.code}: {issue.message}", markup=False)
