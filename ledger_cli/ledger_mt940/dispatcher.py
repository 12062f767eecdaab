"""Single-pass tag state machine over decoded MT940 lines."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from ledger_cli.shared.exceptions import MalformedRecordError, StatementFormatError

from .fields import DEFAULT_CENTURY, EXCHANGE_RATE_PREFIX, normalize_decimal, parse_balance
from .hashing import FIELD_SEPARATOR
from .parser import finalize_transaction
from .types import Balance, PendingTransaction, Statement, Transaction

TAG_INIT = ":20:"
TAG_ACCOUNT = ":25:"
TAG_STATEMENT_NO = ":28C:"
TAG_OPENING_BALANCE = ":60F:"
TAG_CLOSING_BALANCE = ":62F:"
TAG_AVAILABLE_BALANCE = ":64:"
TAG_TRANSACTION = ":61:"
TAG_EXCHANGE_RATE = EXCHANGE_RATE_PREFIX
TAG_DESCRIPTION = ":86:"

INIT_PAYLOAD = "MT940"
DEFAULT_ACCOUNT_LABEL_PREFIX = "ING"

_LOGGER = logging.getLogger(__name__)


class ScanState(Enum):
    IDLE = "idle"
    TRANSACTION = "transaction"
    DETAILS = "details"


class StatementDispatcher:
    """Route each line by its tag and collect the statement being decoded.

    ``IDLE`` covers the statement header and trailer; ``TRANSACTION`` follows a
    ``:61:`` line; ``DETAILS`` follows a ``:86:`` line, where untagged lines
    continue the details block. A pending transaction is finalized when the
    next ``:61:`` arrives or in :meth:`finish`. Once a statement tag returns
    the machine to ``IDLE``, statement-level ``:86:`` and ``KURS`` lines are
    ignored instead of extending the last transaction.
    """

    def __init__(
        self,
        *,
        account_label_prefix: str = DEFAULT_ACCOUNT_LABEL_PREFIX,
        century: str = DEFAULT_CENTURY,
    ) -> None:
        self.account_label_prefix = account_label_prefix
        self.century = century
        self.state = ScanState.IDLE
        self._account_iban = ""
        self._statement_no = ""
        self._opening: Balance | None = None
        self._closing: Balance | None = None
        self._available: Balance | None = None
        self._pending: PendingTransaction | None = None
        self._transactions: list[Transaction] = []

    def feed(self, line: str) -> None:
        if FIELD_SEPARATOR in line:
            _LOGGER.warning("Dropping NUL characters from line: %r", line)
            line = line.replace(FIELD_SEPARATOR, "").strip()
        if not line:
            return

        if line.startswith(TAG_INIT):
            payload = line[len(TAG_INIT) :]
            if payload != INIT_PAYLOAD:
                raise StatementFormatError(f"Not an MT940 statement: {line!r}")
            self.state = ScanState.IDLE
        elif line.startswith(TAG_ACCOUNT):
            self._account_iban = line[len(TAG_ACCOUNT) :].lstrip("/")
            self.state = ScanState.IDLE
        elif line.startswith(TAG_STATEMENT_NO):
            self._statement_no = line[len(TAG_STATEMENT_NO) :]
            self.state = ScanState.IDLE
        elif line.startswith(TAG_OPENING_BALANCE):
            self._opening = self._balance(line, TAG_OPENING_BALANCE)
            self.state = ScanState.IDLE
        elif line.startswith(TAG_CLOSING_BALANCE):
            self._closing = self._balance(line, TAG_CLOSING_BALANCE)
            self.state = ScanState.IDLE
        elif line.startswith(TAG_AVAILABLE_BALANCE):
            self._available = self._balance(line, TAG_AVAILABLE_BALANCE)
            self.state = ScanState.IDLE
        elif line.startswith(TAG_TRANSACTION):
            self._start_transaction(line[len(TAG_TRANSACTION) :])
            self.state = ScanState.TRANSACTION
        elif line.startswith(TAG_EXCHANGE_RATE):
            if self.state is ScanState.IDLE:
                _LOGGER.debug("Exchange rate outside a transaction ignored: %r", line)
                return
            self._pending.exchange_rate = normalize_decimal(line[len(TAG_EXCHANGE_RATE) :])  # type: ignore[union-attr]
        elif line.startswith(TAG_DESCRIPTION):
            if self.state is ScanState.IDLE:
                _LOGGER.debug("Description outside a transaction ignored: %r", line)
                return
            self._pending.add_description(line[len(TAG_DESCRIPTION) :])  # type: ignore[union-attr]
            self.state = ScanState.DETAILS
        elif self.state is ScanState.IDLE:
            _LOGGER.debug("Untagged line outside a transaction ignored: %r", line)
        else:
            self._pending.add_continuation(line)  # type: ignore[union-attr]

    def feed_all(self, lines: Iterable[str]) -> StatementDispatcher:
        for line in lines:
            self.feed(line)
        return self

    def finish(self) -> Statement:
        """Flush the pending transaction and return the decoded statement."""

        self._flush()
        self.state = ScanState.IDLE
        return Statement(
            account_iban=self._account_iban,
            statement_no=self._statement_no,
            opening=self._opening,
            closing=self._closing,
            available=self._available,
            transactions=tuple(self._transactions),
        )

    def _balance(self, line: str, tag: str) -> Balance | None:
        try:
            return parse_balance(line[len(tag) :])
        except MalformedRecordError as exc:
            _LOGGER.warning("Ignoring %s balance: %s", tag, exc)
            return None

    def _start_transaction(self, payload: str) -> None:
        self._flush()
        currency = self._opening.currency if self._opening else ""
        self._pending = PendingTransaction(
            primary=payload,
            account_currency=currency,
            account_label=f"{self.account_label_prefix} {currency}".strip(),
        )

    def _flush(self) -> None:
        if self._pending is None:
            return
        self._transactions.append(finalize_transaction(self._pending, century=self.century))
        self._pending = None
