"""Fatal conditions raised while reading or writing a PNG container."""
from __future__ import annotations

from .const import ERRORS


class ChunkStoreError(ValueError):
    code = ""

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = ERRORS[self.code]
        super().__init__(f"{message}: {detail}" if detail else message)

    def to_dict(self) -> dict:
        out = {"code": self.code, "message": ERRORS[self.code]}
        if self.detail:
            out["detail"] = self.detail
        return out


class NotPNGError(ChunkStoreError):
    code = "E_NOT_PNG"


class BadLengthError(ChunkStoreError):
    code = "E_BAD_LENGTH"

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"length {length}")


class ChecksumMismatchError(ChunkStoreError):
    code = "E_CRC_MISMATCH"

    def __init__(self, tag: bytes, stored: int, computed: int, offset: int):
        self.tag = tag
        self.stored = stored
        self.computed = computed
        self.offset = offset
        super().__init__(
            f"{tag!r} at offset {offset}: stored {stored:08x}, computed {computed:08x}"
        )


class UnexpectedEOFError(ChunkStoreError, EOFError):
    code = "E_UNEXPECTED_EOF"

    def __init__(self, what: str, expected: int, got: int, offset: int):
        self.expected = expected
        self.got = got
        self.offset = offset
        super().__init__(f"{what} at offset {offset}: wanted {expected} bytes, got {got}")
