"""pngitxt core - shared PNG chunk protocol."""
from .crc import crc32, pack_chunk

__all__ = ["crc32", "pack_chunk"]
