"""Turn a pending transaction's raw blocks into a finalized record."""

from __future__ import annotations

import logging
from dataclasses import replace

from .details import parse_details, reconcile
from .fields import DEFAULT_CENTURY, parse_primary, parse_summary
from .hashing import transaction_digest
from .types import PendingTransaction, Transaction

PRIMARY_UNMATCHED = "primary_unmatched"
SUMMARY_UNMATCHED = "summary_unmatched"

_LOGGER = logging.getLogger(__name__)


def finalize_transaction(
    pending: PendingTransaction,
    *,
    century: str = DEFAULT_CENTURY,
) -> Transaction:
    """Parse, cross-check and hash one transaction.

    Stages that do not match leave their fields empty and add a flag to
    ``issues``; the record is returned either way.
    """

    issues: list[str] = []

    primary = parse_primary(pending.primary, century=century)
    if not primary.matched:
        _LOGGER.warning("Transaction line did not match the :61: layout: %r", pending.primary)
        issues.append(PRIMARY_UNMATCHED)

    summary = parse_summary(pending.summary)
    if pending.has_summary and not summary.matched:
        _LOGGER.warning("Summary line did not match the :86: layout: %r", pending.summary)
        issues.append(SUMMARY_UNMATCHED)

    details = parse_details(pending.details)
    issues.extend(reconcile(pending.exchange_rate, summary, details))

    transaction = Transaction(
        value_date=primary.value_date,
        accounting_date=primary.accounting_date,
        accounting_month=primary.accounting_month,
        amount=primary.amount,
        account_currency=pending.account_currency,
        account_label=pending.account_label,
        code=primary.code,
        transaction_id=primary.transaction_id,
        primary_remainder=primary.remainder,
        exchange_rate=pending.exchange_rate,
        sub_code=summary.sub_code,
        external_id=summary.external_id,
        currency=summary.currency,
        currency_amount=summary.currency_amount,
        summary_remainder=summary.remainder,
        details_code=details.code,
        title=details.title,
        reference=details.reference,
        nrb=details.nrb,
        nrozl=details.nrozl,
        nrach=details.nrach,
        name=details.name,
        bic=details.bic,
        iban=details.iban,
        fee=details.fee,
        detail_sub_code=details.sub_code,
        detail_exchange_rate=details.exchange_rate,
        raw_primary=pending.primary,
        raw_summary=pending.summary,
        raw_details=pending.details,
        issues=tuple(issues),
    )
    return replace(transaction, digest=transaction_digest(transaction))
