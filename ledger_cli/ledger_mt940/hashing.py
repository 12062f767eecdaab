"""Content digest used as a transaction's identity across imports."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

from ledger_cli.shared.exceptions import MalformedRecordError

from .types import Transaction

# The dispatcher strips NUL from every line, so no field value contains it.
FIELD_SEPARATOR = "\x00"
DIGEST_SIZE = 16

# Order matters: reordering changes every digest ever stored.
HASHED_FIELDS: tuple[str, ...] = (
    "accounting_month",
    "account_label",
    "accounting_date",
    "amount",
    "account_currency",
    "transaction_id",
    "title",
    "reference",
    "name",
    "iban",
    "bic",
    "currency",
    "currency_amount",
    "value_date",
    "external_id",
    "amount",
)


def compute_digest(values: Iterable[str]) -> bytes:
    """Return the first half of the SHA256 of the separator-joined values."""

    items = list(values)
    for value in items:
        if FIELD_SEPARATOR in value:
            raise MalformedRecordError(f"Field value contains the digest separator: {value!r}")
    joined = FIELD_SEPARATOR.join(items)
    return hashlib.sha256(joined.encode("utf-8")).digest()[:DIGEST_SIZE]


def transaction_digest(transaction: Transaction) -> bytes:
    """Digest ``transaction`` over :data:`HASHED_FIELDS`, ignoring its stored digest."""

    return compute_digest(getattr(transaction, name) for name in HASHED_FIELDS)
