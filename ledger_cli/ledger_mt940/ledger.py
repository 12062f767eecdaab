"""Merge decoded statements into one ledger keyed by transaction digest."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .types import Statement, Transaction


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """A transaction together with the statement it was first seen in."""

    account_iban: str
    statement_no: str
    transaction: Transaction


@dataclass(frozen=True, slots=True)
class LedgerAddResult:
    added: int
    duplicates: int


class Ledger:
    """Ordered, de-duplicated collection of transactions.

    Re-importing an overlapping statement only adds transactions whose digest
    has not been seen before; the first occurrence wins.
    """

    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []
        self._seen: set[bytes] = set()

    def add(self, statement: Statement) -> LedgerAddResult:
        added = 0
        duplicates = 0
        for transaction in statement.transactions:
            if transaction.digest in self._seen:
                duplicates += 1
                continue
            self._seen.add(transaction.digest)
            self._entries.append(
                LedgerEntry(
                    account_iban=statement.account_iban,
                    statement_no=statement.statement_no,
                    transaction=transaction,
                )
            )
            added += 1
        return LedgerAddResult(added=added, duplicates=duplicates)

    def __contains__(self, transaction: Transaction) -> bool:
        return transaction.digest in self._seen

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)


def merge_statements(statements: Iterable[Statement]) -> Ledger:
    """Build a ledger from statements in the order given."""

    ledger = Ledger()
    for statement in statements:
        ledger.add(statement)
    return ledger
