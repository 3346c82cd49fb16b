"""pngitxt store - read, edit and rewrite PNG iTXt metadata."""
from .errors import (
    ChunkStoreError,
    NotPNGError,
    BadLengthError,
    ChecksumMismatchError,
    UnexpectedEOFError,
)
from .reader import ChunkInfo, ScanResult, scan
from .store import ChunkStore
from .writer import encode_itxt, encode_table

__all__ = [
    "ChunkStore",
    "ChunkInfo", "ScanResult", "scan",
    "encode_itxt", "encode_table",
    "ChunkStoreError", "NotPNGError", "BadLengthError",
    "ChecksumMismatchError", "UnexpectedEOFError",
]
