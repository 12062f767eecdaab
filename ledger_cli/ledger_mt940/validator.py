"""Diagnostic report over a decoded statement.

The decoder keeps every anomaly it can recover from (unmatched lines,
disagreeing duplicate fields) on the records themselves. This module turns
those flags into a reviewable list of findings and, on request, checks that
the opening balance plus all posted amounts lands on the closing balance:

* transaction ``issues`` flags become warnings
* missing opening/closing balances are warnings
* repeated digests within one file are warnings (identical postings)
* balance reconciliation failures are errors
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ledger_cli.shared.exceptions import MalformedRecordError

from .amounts import amount_to_cents
from .types import Statement, Transaction


@dataclass(slots=True)
class ValidationIssue:
    """Single validation finding."""

    code: str
    message: str
    severity: str = "error"  # "error" | "warning"


@dataclass(slots=True)
class ValidationReport:
    """Aggregate report returned by ``validate_statement``."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no error-level issues were recorded."""

        return all(issue.severity != "error" for issue in self.issues)

    def add(self, code: str, message: str, *, severity: str = "error") -> None:
        self.issues.append(ValidationIssue(code=code, message=message, severity=severity))


def validate_statement(statement: Statement, *, check_balances: bool = False) -> ValidationReport:
    """Validate a decoded statement and emit findings."""

    report = ValidationReport()

    if statement.opening is None:
        report.add("missing_opening_balance", "No usable :60F: balance.", severity="warning")
    if statement.closing is None:
        report.add("missing_closing_balance", "No usable :62F: balance.", severity="warning")

    seen: set[bytes] = set()
    for index, txn in enumerate(statement.transactions, start=1):
        for flag in txn.issues:
            report.add(flag, f"Transaction #{index} {_describe(txn)}: {flag}", severity="warning")
        if txn.digest in seen:
            report.add(
                "duplicate_digest",
                f"Transaction #{index} {_describe(txn)} repeats an earlier entry.",
                severity="warning",
            )
        seen.add(txn.digest)

    if check_balances:
        _check_balances(statement, report)

    return report


def _check_balances(statement: Statement, report: ValidationReport) -> None:
    if statement.opening is None or statement.closing is None:
        report.add(
            "balance_unchecked",
            "Cannot reconcile balances without both opening and closing balances.",
            severity="warning",
        )
        return
    try:
        opening = statement.opening.cents()
        closing = statement.closing.cents()
        movement = sum(amount_to_cents(txn.amount) for txn in statement.transactions)
    except MalformedRecordError as exc:
        report.add("balance_unparseable", str(exc))
        return
    if opening + movement != closing:
        report.add(
            "balance_mismatch",
            f"Opening {_format_cents(opening)} + movements {_format_cents(movement)} "
            f"!= closing {_format_cents(closing)}.",
        )


def _describe(txn: Transaction) -> str:
    return f"({txn.accounting_date or '?'} {txn.amount or '?'})"


def _format_cents(value: int) -> str:
    sign = "-" if value < 0 else ""
    value = abs(value)
    return f"{sign}{value // 100}.{value % 100:02d}"
