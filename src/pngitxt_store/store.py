"""PNG iTXt ChunkStore - editable text metadata over an untouched PNG."""
from __future__ import annotations

import io
import threading
from typing import BinaryIO

from .reader import ChunkInfo, scan
from .writer import encode_table, write_container


class ChunkStore:
    """Parsed PNG split into passthrough bytes, an iTXt table and a trailer.

    - `start` is the signature plus every non-iTXt chunk before IEND, CRCs intact.
    - `end` is IEND and everything after it, verbatim.
    - The iTXt table is the only mutable state; one lock covers it and `write`.
    """

    def __init__(self, source: BinaryIO):
        result = scan(source)
        self._start = result.start
        self._end = result.end
        self._chunks = result.chunks
        self._scan_stats = result.stats
        self._itxt: dict[str, bytes] = result.table
        self._lock = threading.Lock()

    @classmethod
    def from_bytes(cls, data: bytes) -> "ChunkStore":
        return cls(io.BytesIO(data))

    @property
    def start(self) -> bytes:
        return self._start

    @property
    def end(self) -> bytes:
        return self._end

    @property
    def chunks(self) -> tuple[ChunkInfo, ...]:
        return self._chunks

    def get_scan_stats(self) -> dict:
        return dict(self._scan_stats)

    def delete(self, key: str) -> None:
        with self._lock:
            self._itxt.pop(key, None)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._itxt[key] = memoryview(value).tobytes()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._itxt.get(key)

    def get_all(self) -> dict[str, bytes]:
        with self._lock:
            return dict(self._itxt)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._itxt

    def __len__(self) -> int:
        with self._lock:
            return len(self._itxt)

    def write(self, sink: BinaryIO) -> None:
        # The lock is held across the sink writes; a slow sink stalls accessors.
        with self._lock:
            body = encode_table(self._itxt)
            write_container(sink, self._start, body, self._end)

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.write(buf)
        return buf.getvalue()
