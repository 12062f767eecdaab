"""Dataclasses describing decoded MT940 statement data."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .amounts import amount_to_cents


@dataclass(frozen=True, slots=True)
class Balance:
    """Opening, closing or available balance taken from a balance tag."""

    amount: str  # signed, dot-decimal
    currency: str
    date: str  # raw YYMMDD

    def cents(self) -> int:
        return amount_to_cents(self.amount)


@dataclass(frozen=True, slots=True)
class PrimaryFields:
    """Fields recovered from the ``:61:`` line; empty when the pattern missed."""

    matched: bool = False
    value_date: str = ""
    accounting_date: str = ""
    accounting_month: str = ""
    amount: str = ""
    code: str = ""
    transaction_id: str = ""
    remainder: str = ""


@dataclass(frozen=True, slots=True)
class SummaryFields:
    """Fields recovered from the first ``:86:`` line."""

    matched: bool = False
    sub_code: str = ""
    external_id: str = ""
    currency: str = ""
    currency_amount: str = ""
    remainder: str = ""


@dataclass(frozen=True, slots=True)
class DetailFields:
    """Fields recovered from the ``~``-delimited details block."""

    matched: bool = False
    code: str = ""
    title: str = ""
    reference: str = ""
    nrb: str = ""
    nrozl: str = ""
    nrach: str = ""
    name: str = ""
    bic: str = ""
    iban: str = ""
    fee: str = ""
    sub_code: str = ""
    exchange_rate: str = ""


@dataclass(frozen=True, slots=True)
class Transaction:
    """One posted entry of a statement, flattened from its three raw blocks."""

    # core, from the :61: line
    value_date: str = ""
    accounting_date: str = ""
    accounting_month: str = ""
    amount: str = ""
    account_currency: str = ""
    account_label: str = ""
    code: str = ""
    transaction_id: str = ""
    primary_remainder: str = ""
    exchange_rate: str = ""

    # summary, from the first :86: line
    sub_code: str = ""
    external_id: str = ""
    currency: str = ""
    currency_amount: str = ""
    summary_remainder: str = ""

    # details, from the sub-tagged block
    details_code: str = ""
    title: str = ""
    reference: str = ""
    nrb: str = ""
    nrozl: str = ""
    nrach: str = ""
    name: str = ""
    bic: str = ""
    iban: str = ""
    fee: str = ""
    detail_sub_code: str = ""
    detail_exchange_rate: str = ""

    raw_primary: str = ""
    raw_summary: str = ""
    raw_details: str = ""

    issues: tuple[str, ...] = ()
    digest: bytes = b""

    @property
    def fingerprint(self) -> str:
        """Hex form of the content digest, used as the dedup key."""
        return self.digest.hex()


@dataclass(slots=True)
class PendingTransaction:
    """Raw text accumulated for a transaction that has not been finalized yet."""

    primary: str
    account_currency: str
    account_label: str
    summary: str = ""
    details: str = ""
    exchange_rate: str = ""
    has_summary: bool = False

    def add_description(self, text: str) -> None:
        # The first :86: payload is the summary line, the rest belongs to the details block.
        if not self.has_summary:
            self.summary = text
            self.has_summary = True
        else:
            self.details += text

    def add_continuation(self, text: str) -> None:
        self.details += text


@dataclass(frozen=True, slots=True)
class Statement:
    """One decoded MT940 file."""

    account_iban: str = ""
    statement_no: str = ""
    opening: Balance | None = None
    closing: Balance | None = None
    available: Balance | None = None
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self.transactions)

    @property
    def currency(self) -> str:
        return self.opening.currency if self.opening else ""

    def label(self) -> str:
        """Short human-readable name used in CLI output."""
        number = int(self.statement_no) if self.statement_no.isdigit() else 0
        opening_date = self.opening.date if self.opening else "?"
        closing_date = self.closing.date if self.closing else "?"
        return (
            f"{self.account_iban or '?'} #{number} | {self.currency or '?'} "
            f"{opening_date}..{closing_date}"
        )
