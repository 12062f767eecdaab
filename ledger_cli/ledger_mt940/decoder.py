"""Public entry points for decoding MT940 statement files."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from ledger_cli.shared.config import AppConfig

from .dispatcher import DEFAULT_ACCOUNT_LABEL_PREFIX, StatementDispatcher
from .fields import DEFAULT_CENTURY
from .scanner import DEFAULT_ENCODING, iter_lines
from .types import Statement


@dataclass(frozen=True, slots=True)
class DecodeOptions:
    """Knobs for one decode pass."""

    encoding: str = DEFAULT_ENCODING
    account_label_prefix: str = DEFAULT_ACCOUNT_LABEL_PREFIX
    century: str = DEFAULT_CENTURY

    @classmethod
    def from_config(cls, config: AppConfig) -> DecodeOptions:
        return cls(
            encoding=config.mt940.encoding,
            account_label_prefix=config.mt940.account_label_prefix,
            century=config.mt940.century,
        )


def decode_lines(lines: Iterable[str], *, options: DecodeOptions | None = None) -> Statement:
    """Decode already split and decoded lines."""

    options = options or DecodeOptions()
    dispatcher = StatementDispatcher(
        account_label_prefix=options.account_label_prefix,
        century=options.century,
    )
    return dispatcher.feed_all(lines).finish()


def decode_statement(stream: BinaryIO, *, options: DecodeOptions | None = None) -> Statement:
    """Decode one statement from a binary stream.

    Raises ``StatementFormatError`` for a file with the wrong init tag; read
    errors from ``stream`` propagate unchanged.
    """

    options = options or DecodeOptions()
    return decode_lines(iter_lines(stream, encoding=options.encoding), options=options)


def read_mt940(path: str | Path, *, options: DecodeOptions | None = None) -> Statement:
    """Open ``path`` and decode it; the handle is closed on every exit path."""

    with Path(path).expanduser().open("rb") as handle:
        return decode_statement(handle, options=options)
