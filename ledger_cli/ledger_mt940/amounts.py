"""Exact integer-cent conversion for statement amounts."""

from __future__ import annotations

import re

from ledger_cli.shared.exceptions import MalformedRecordError

DECIMAL_POINT = "."

_CENTS_RE = re.compile(r"^(-?)([0-9]+)\.([0-9]{2})$")


def amount_to_cents(amount: str) -> int:
    """Convert a signed dot-decimal amount such as ``-1234.56`` into cents.

    Only plain digits with exactly two fraction digits are accepted; an empty
    amount counts as zero.
    """

    cleaned = amount.replace(" ", "")
    if not cleaned:
        return 0
    separators = cleaned.count(DECIMAL_POINT)
    if separators > 1:
        raise MalformedRecordError(f"Too many decimal separators ({separators}) in '{amount}'")
    match = _CENTS_RE.match(cleaned)
    if match is None:
        raise MalformedRecordError(f"Expected 2 decimal places in '{amount}'")
    sign, units, fraction = match.groups()
    value = int(units + fraction)
    return -value if sign else value
