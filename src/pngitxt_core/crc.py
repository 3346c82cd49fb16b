import struct
import zlib

from .protocol import CHUNK_LENGTH_FMT, CHUNK_CRC_FMT, MAX_CHUNK_LENGTH


def crc32(*parts: bytes) -> int:
    """CRC-32 (IEEE) over the concatenation of parts."""
    acc = 0
    for part in parts:
        acc = zlib.crc32(part, acc)
    return acc & 0xFFFFFFFF


def pack_chunk(tag: bytes, body: bytes) -> bytes:
    if len(body) > MAX_CHUNK_LENGTH:
        raise ValueError(f"Chunk body of {len(body)} bytes exceeds {MAX_CHUNK_LENGTH}")
    return struct.pack(CHUNK_LENGTH_FMT, len(body)) + tag + body + struct.pack(CHUNK_CRC_FMT, crc32(tag, body))
