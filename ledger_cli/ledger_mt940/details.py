"""Sub-tag decomposition of the ``:86:`` details block.

The details block is a ``~``-separated run of segments whose first two
characters name the field (``20Invoice~21#123~38PL...``). Only the keys in
:class:`DetailKey` carry meaning for this statement variant; anything else is
dropped with a debug record. Repeated keys accumulate in encounter order,
which is how banks split long titles and names across segments.
"""

from __future__ import annotations

import logging
from enum import Enum

from .fields import mark_text, normalize_decimal
from .types import DetailFields, SummaryFields

DETAILS_SEPARATOR = "~"

SUB_CODE_MISMATCH = "sub_code_mismatch"
EXCHANGE_RATE_MISMATCH = "exchange_rate_mismatch"

_LOGGER = logging.getLogger(__name__)


class DetailKey(Enum):
    """Two-character sub-tags recognised inside a details block."""

    CODE = "00"
    TITLE_1 = "20"
    TITLE_2 = "21"
    TITLE_3 = "22"
    TITLE_4 = "23"
    TITLE_5 = "24"
    TITLE_6 = "25"
    REFERENCE_1 = "26"
    REFERENCE_2 = "27"
    REFERENCE_3 = "28"
    NRB = "29"
    NROZL = "30"
    NRACH = "31"
    NAME_1 = "32"
    NAME_2 = "33"
    SUB_CODE = "34"
    IBAN = "38"
    FEE = "60"
    EXCHANGE_RATE = "61"
    NAME_3 = "62"
    NAME_4 = "63"


_KEYS_BY_CODE = {key.value: key for key in DetailKey}

_TITLE_TAIL = (
    DetailKey.TITLE_2,
    DetailKey.TITLE_3,
    DetailKey.TITLE_4,
    DetailKey.TITLE_5,
    DetailKey.TITLE_6,
)
_REFERENCE_PARTS = (DetailKey.REFERENCE_1, DetailKey.REFERENCE_2, DetailKey.REFERENCE_3)
_NAME_PARTS = (DetailKey.NAME_1, DetailKey.NAME_2, DetailKey.NAME_3, DetailKey.NAME_4)


def split_details(block: str, *, separator: str = DETAILS_SEPARATOR) -> dict[DetailKey, str]:
    """Return sub-tag values in first-seen order, concatenating repeats."""

    values: dict[DetailKey, str] = {}
    for segment in block.split(separator):
        if not segment:
            # A block that opens with the separator leaves an empty first segment.
            _LOGGER.debug("Skipping empty details segment")
            continue
        if len(segment) < 2:
            _LOGGER.warning("Skipping details segment without a sub-tag: %r", segment)
            continue
        key = _KEYS_BY_CODE.get(segment[0:2])
        if key is None:
            _LOGGER.debug("Ignoring unknown details sub-tag %r", segment[0:2])
            continue
        values[key] = values.get(key, "") + segment[2:]
    return values


def _joined(values: dict[DetailKey, str], keys: tuple[DetailKey, ...]) -> str:
    return "".join(values.get(key, "") for key in keys)


def parse_details(block: str) -> DetailFields:
    """Map a details block onto named fields; an empty block yields empty fields."""

    if not block:
        return DetailFields()
    values = split_details(block)
    title = values.get(DetailKey.TITLE_1, "") + " " + _joined(values, _TITLE_TAIL)
    return DetailFields(
        matched=True,
        code=values.get(DetailKey.CODE, ""),
        title=title.strip(),
        reference=mark_text(_joined(values, _REFERENCE_PARTS).strip()),
        nrb=mark_text(values.get(DetailKey.NRB, "").strip()),
        nrozl=mark_text(values.get(DetailKey.NROZL, "").strip()),
        nrach=mark_text(values.get(DetailKey.NRACH, "").strip()),
        name=_joined(values, _NAME_PARTS).strip(),
        iban=values.get(DetailKey.IBAN, "").strip(),
        fee=values.get(DetailKey.FEE, "").strip(),
        sub_code=mark_text(values.get(DetailKey.SUB_CODE, "").strip()),
        exchange_rate=normalize_decimal(values.get(DetailKey.EXCHANGE_RATE, "")),
    )


def reconcile(exchange_rate: str, summary: SummaryFields, details: DetailFields) -> tuple[str, ...]:
    """Compare the fields that the details block repeats and flag disagreements.

    Neither copy wins: callers keep both values and the returned flags.
    """

    issues: list[str] = []
    if details.sub_code and details.sub_code != summary.sub_code:
        _LOGGER.warning(
            "Details sub-code %s does not match summary sub-code %s",
            details.sub_code,
            summary.sub_code or "<missing>",
        )
        issues.append(SUB_CODE_MISMATCH)
    if details.exchange_rate and details.exchange_rate != exchange_rate:
        _LOGGER.warning(
            "Details exchange rate %s does not match KURS rate %s",
            details.exchange_rate,
            exchange_rate or "<missing>",
        )
        issues.append(EXCHANGE_RATE_MISMATCH)
    return tuple(issues)
