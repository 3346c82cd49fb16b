import sys
from pathlib import Path

# Signature is 8 bytes, then IHDR: length(4) | tag(4) | body(13) | crc(4).
IHDR_BODY_OFFSET = 8 + 8


def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_byte.py <file.png>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < IHDR_BODY_OFFSET + 13 + 4:
        print("File too small to corrupt safely.")
        raise SystemExit(2)

    # Flip the low bit of the IHDR width; the stored CRC is left alone.
    idx = IHDR_BODY_OFFSET + 3
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
