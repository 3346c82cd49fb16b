"""PNG iTXt protocol constants.

Single source of truth for on-disk magic values and chunk layouts.
Keep this file stable. Reader and Writer must remain synchronized.
"""

# File signature
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Chunk tags
TAG_ITXT = b"iTXt"  # International text, owned by the metadata table
TAG_IEND = b"IEND"  # Terminal chunk

# Header: [Length(4, signed) | Tag(4)] = 8 bytes
CHUNK_HEADER_FMT = ">i4s"
CHUNK_HEADER_LEN = 8

# Length field alone, checked before the tag is trusted
CHUNK_LENGTH_FMT = ">i"
CHUNK_LENGTH_LEN = 4

# Trailer: [CRC-32(4)] over tag + body
CHUNK_CRC_FMT = ">I"
CHUNK_CRC_LEN = 4

# Largest body the signed length field can describe
MAX_CHUNK_LENGTH = 2**31 - 1

# iTXt body: [Key | 5 zero bytes | Value]
# The zero run stands in for the keyword terminator, compression flag,
# compression method and empty language/translated-keyword fields.
ITXT_SEPARATOR = b"\x00" * 5

# Keys are text; undecodable bytes must survive a decode/encode cycle.
KEY_ENCODING = "utf-8"
KEY_ERRORS = "surrogateescape"

# Whitespace trimmed from keys: ASCII space controls, NEL, NBSP and the
# Unicode White_Space characters. The separators \x1c-\x1f are not included.
KEY_WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000"
)

# Canonical zero-length IEND chunk
IEND_CHUNK = b"\x00\x00\x00\x00IEND\xaeB`\x82"
