from __future__ import annotations

import errno
import io
from typing import BinaryIO, Mapping

from pngitxt_core.crc import pack_chunk
from pngitxt_core.protocol import (
    TAG_ITXT,
    ITXT_SEPARATOR,
    MAX_CHUNK_LENGTH,
    KEY_ENCODING,
    KEY_ERRORS,
)

from .errors import BadLengthError


def encode_itxt(key: str, value: bytes) -> bytes:
    """Encode one table entry as a complete iTXt chunk with a fresh CRC."""
    body = key.encode(KEY_ENCODING, KEY_ERRORS) + ITXT_SEPARATOR + bytes(value)
    if len(body) > MAX_CHUNK_LENGTH:
        raise BadLengthError(len(body))
    return pack_chunk(TAG_ITXT, body)


def encode_table(table: Mapping[str, bytes]) -> bytes:
    """Encode every entry in table iteration order. Order is not a contract."""
    buf = io.BytesIO()
    for key, value in table.items():
        buf.write(encode_itxt(key, value))
    return buf.getvalue()


def _write_all(sink: BinaryIO, data: bytes) -> None:
    """Write all of data, retrying short writes."""
    view = memoryview(data)
    while view:
        n = sink.write(view)
        if n is None:
            # Non-blocking raw stream with nothing written
            raise BlockingIOError(errno.EAGAIN, "Sink would block", len(data) - len(view))
        if n <= 0:
            raise OSError(f"Short write: sink accepted {n} of {len(view)} remaining bytes")
        view = view[n:]


def write_container(sink: BinaryIO, start: bytes, body: bytes, end: bytes) -> None:
    # Sink errors propagate; a partially written destination must be discarded.
    _write_all(sink, start)
    _write_all(sink, body)
    _write_all(sink, end)
