from __future__ import annotations

import io
import shutil
import struct
from dataclasses import dataclass, field
from typing import BinaryIO
from warnings import warn

from pngitxt_core.crc import crc32
from pngitxt_core.protocol import (
    PNG_SIGNATURE,
    TAG_ITXT,
    TAG_IEND,
    CHUNK_HEADER_FMT,
    CHUNK_HEADER_LEN,
    CHUNK_LENGTH_FMT,
    CHUNK_LENGTH_LEN,
    CHUNK_CRC_FMT,
    CHUNK_CRC_LEN,
    ITXT_SEPARATOR,
    KEY_ENCODING,
    KEY_ERRORS,
    KEY_WHITESPACE,
)

from .const import STATUS_PASSTHROUGH, STATUS_ITXT, STATUS_ITXT_DROPPED, STATUS_TERMINAL
from .errors import NotPNGError, BadLengthError, ChecksumMismatchError, UnexpectedEOFError


@dataclass(frozen=True)
class ChunkInfo:
    offset: int
    length: int
    tag: str
    status: str

    def to_dict(self) -> dict:
        return {"offset": self.offset, "length": self.length, "tag": self.tag, "status": self.status}


@dataclass
class ScanResult:
    start: bytes
    table: dict[str, bytes]
    end: bytes
    chunks: tuple[ChunkInfo, ...] = ()
    stats: dict = field(default_factory=dict)


def split_itxt(body: bytes) -> tuple[str, bytes] | None:
    """Split an iTXt body into (key, value), or None if it is malformed."""
    parts = body.split(ITXT_SEPARATOR)
    if len(parts) != 2:
        return None
    key = parts[0].decode(KEY_ENCODING, KEY_ERRORS).strip(KEY_WHITESPACE)
    return key, parts[1]


class ChunkReader:
    """One-shot scanner over a PNG byte stream.

    - Everything before IEND that is not iTXt is copied to `start`, CRC verified.
    - iTXt chunks are decoded into `table` and never passed through.
    - IEND and every byte after it are copied to `end` without parsing.
    """

    def __init__(self, source: BinaryIO):
        self.f = source
        self.pos = 0
        self.start = io.BytesIO()
        self.end = io.BytesIO()
        self.table: dict[str, bytes] = {}
        self.chunks: list[ChunkInfo] = []
        self.scan_stats = {
            "chunks": 0,
            "passthrough": 0,
            "itxt": 0,
            "dropped_itxt": 0,
            "trailer_bytes": 0,
        }

    def _read_exact(self, n: int) -> bytes:
        """Read up to n bytes, retrying short reads until n or EOF."""
        buf = bytearray()
        while len(buf) < n:
            data = self.f.read(n - len(buf))
            if not data:
                break
            buf += data
        self.pos += len(buf)
        return bytes(buf)

    def scan(self) -> ScanResult:
        signature = self._read_exact(len(PNG_SIGNATURE))
        if signature != PNG_SIGNATURE:
            raise NotPNGError(f"found {signature!r}")
        self.start.write(signature)

        while self._next_chunk():
            pass

        return ScanResult(
            start=self.start.getvalue(),
            table=self.table,
            end=self.end.getvalue(),
            chunks=tuple(self.chunks),
            stats=dict(self.scan_stats),
        )

    def _next_chunk(self) -> bool:
        """Consume one chunk. Returns False once the scan is finished."""
        start_off = self.pos
        header = self._read_exact(CHUNK_HEADER_LEN)

        # Clean EOF at a chunk boundary
        if len(header) == 0:
            warn(f"No IEND chunk before end of stream at offset {start_off}")
            return False

        # Length is checked before the tag so a negative length fails first
        if len(header) >= CHUNK_LENGTH_LEN:
            (length,) = struct.unpack(CHUNK_LENGTH_FMT, header[:CHUNK_LENGTH_LEN])
            if length < 0:
                raise BadLengthError(length)

        if len(header) < CHUNK_HEADER_LEN:
            raise UnexpectedEOFError("chunk header", CHUNK_HEADER_LEN, len(header), start_off)

        length, tag = struct.unpack(CHUNK_HEADER_FMT, header)

        body = self._read_exact(length)
        if len(body) != length:
            raise UnexpectedEOFError(f"{tag!r} body", length, len(body), start_off)

        self.scan_stats["chunks"] += 1
        tag_name = tag.decode("latin-1")

        if tag == TAG_IEND:
            self.end.write(header)
            self.end.write(body)
            shutil.copyfileobj(self.f, self.end)
            self.scan_stats["trailer_bytes"] = self.end.tell()
            self.chunks.append(ChunkInfo(start_off, length, tag_name, STATUS_TERMINAL))
            return False

        stored = self._read_crc(tag, start_off)

        if tag == TAG_ITXT:
            # CRC is consumed but not checked; the table owns the content now.
            entry = split_itxt(body)
            if entry is None:
                self.scan_stats["dropped_itxt"] += 1
                self.chunks.append(ChunkInfo(start_off, length, tag_name, STATUS_ITXT_DROPPED))
                return True
            key, value = entry
            self.table[key] = value
            self.scan_stats["itxt"] += 1
            self.chunks.append(ChunkInfo(start_off, length, tag_name, STATUS_ITXT))
            return True

        computed = crc32(tag, body)
        if stored != computed:
            raise ChecksumMismatchError(tag, stored, computed, start_off)

        self.start.write(header)
        self.start.write(body)
        self.start.write(struct.pack(CHUNK_CRC_FMT, stored))
        self.scan_stats["passthrough"] += 1
        self.chunks.append(ChunkInfo(start_off, length, tag_name, STATUS_PASSTHROUGH))
        return True

    def _read_crc(self, tag: bytes, start_off: int) -> int:
        raw = self._read_exact(CHUNK_CRC_LEN)
        if len(raw) != CHUNK_CRC_LEN:
            raise UnexpectedEOFError(f"{tag!r} CRC", CHUNK_CRC_LEN, len(raw), start_off)
        (stored,) = struct.unpack(CHUNK_CRC_FMT, raw)
        return stored


def scan(source: BinaryIO) -> ScanResult:
    """Scan a PNG stream into (start, table, end). The source is not retained."""
    return ChunkReader(source).scan()
