"""Shared pytest fixtures for ledger-mt940 tests.

The sample statement mirrors a real ING export: CRLF line endings, the
cp852 code page, a details block that wraps onto an untagged line, a
foreign-currency card payment with a ``KURS`` line and a ``-`` trailer.
Its balances reconcile exactly (1000.00 - 200.50 + 1500.00 - 43.10).
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_LINES: tuple[str, ...] = (
    ":20:MT940",
    ":25:/PL27105010381000009876543210",
    ":28C:00042",
    ":60F:C240531PLN1000,00",
    ":61:2406010601D200,50S073000012345678//REF",
    ":86:073",
    ":86:~00VE02~20Zapłata za fakturę~21nr 12/2024~22/06~27REF-77~29123~3010501038",
    "~31PL27~32Sklep Żółw ~33Sp. z o.o.~34073~38PL61109010140000071219812874",
    ":61:2406030603C1500,00S034000012345679",
    ":86:034",
    ":86:~00VE03~20Wynagrodzenie~32ACME SA~34034",
    ":61:2406150617D43,10S076000012345680",
    ":86:076EXT123EUR10,00 karta",
    "KURS 4,3100",
    ":86:~00KP01~20Netflix~32NETFLIX.COM~34076~614,3100",
    ":62F:C240630PLN2256,40",
    ":64:C240630PLN2256,40",
    "-",
)


def encode_lines(lines: tuple[str, ...] | list[str], *, newline: str = "\r\n") -> bytes:
    return (newline.join(lines) + newline).encode("cp852")


@pytest.fixture()
def sample_lines() -> tuple[str, ...]:
    return SAMPLE_LINES


@pytest.fixture()
def sample_bytes() -> bytes:
    return encode_lines(SAMPLE_LINES)


@pytest.fixture()
def statement_file(tmp_path: Path, sample_bytes: bytes) -> Path:
    path = tmp_path / "statement.sta"
    path.write_bytes(sample_bytes)
    return path


@pytest.fixture()
def write_statement(tmp_path: Path) -> Callable[..., Path]:
    """Write arbitrary lines as a cp852 statement file and return its path."""

    def _write(name: str, lines: tuple[str, ...] | list[str]) -> Path:
        path = tmp_path / name
        path.write_bytes(encode_lines(lines))
        return path

    return _write
