"""Split a raw MT940 byte stream into decoded, trimmed lines."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import BinaryIO

DEFAULT_ENCODING = "cp852"
# Every byte maps to a code point, so this never fails and keeps the bytes intact.
_PASSTHROUGH_ENCODING = "latin-1"

_LOGGER = logging.getLogger(__name__)


def decode_line(data: bytes, *, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode one physical line from the legacy code page and trim it."""

    if data.endswith(b"\r"):
        data = data[:-1]
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as exc:
        _LOGGER.warning("Could not decode line as %s (%s): %r", encoding, exc.reason, data)
        text = data.decode(_PASSTHROUGH_ENCODING)
    return text.strip()


def iter_lines(stream: BinaryIO, *, encoding: str = DEFAULT_ENCODING) -> Iterator[str]:
    """Yield decoded lines from ``stream`` in file order.

    Lines are split on ``\\n`` only; a trailing ``\\r`` is dropped before decoding.
    A last line without a newline terminator is still yielded.
    """

    for raw in stream:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        yield decode_line(raw, encoding=encoding)
