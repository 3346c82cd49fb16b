"""Generate small, valid PNG fixtures with optional iTXt metadata."""
import struct
import sys
import zlib
from pathlib import Path

from pngitxt_core.crc import pack_chunk
from pngitxt_core.protocol import PNG_SIGNATURE, IEND_CHUNK, ITXT_SEPARATOR, TAG_ITXT


def build_png(width: int = 2, height: int = 2, meta: dict | None = None, trailer: bytes = b"") -> bytes:
    """8-bit greyscale gradient, iTXt chunks between IHDR and IDAT."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0)

    # Filter byte 0 per scanline
    raw = b"".join(
        b"\x00" + bytes((x * 255 // max(width - 1, 1)) & 0xFF for x in range(width))
        for _ in range(height)
    )

    out = PNG_SIGNATURE + pack_chunk(b"IHDR", ihdr)
    for key, value in (meta or {}).items():
        out += pack_chunk(TAG_ITXT, key.encode("utf-8") + ITXT_SEPARATOR + value)
    out += pack_chunk(b"tEXt", b"Software\x00make_png")
    out += pack_chunk(b"IDAT", zlib.compress(raw))
    return out + IEND_CHUNK + trailer


def main(argv: list[str]) -> int:
    if len(argv) < 1:
        print("Usage: python tools/make_png.py OUT.png [KEY=VALUE ...]")
        return 2

    out = Path(argv[0])
    meta = {}
    for pair in argv[1:]:
        key, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"Expected KEY=VALUE, got {pair!r}")
        meta[key] = value.encode("utf-8")

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(build_png(meta=meta))
    print(f"GENERATED: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
