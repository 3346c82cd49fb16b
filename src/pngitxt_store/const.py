ERRORS = {
  "E_NOT_PNG": "Input does not start with the PNG signature",
  "E_BAD_LENGTH": "Chunk length outside the signed 32-bit range",
  "E_CRC_MISMATCH": "Chunk CRC-32 does not match its contents",
  "E_UNEXPECTED_EOF": "Stream ended inside a chunk",
}

# Chunk index statuses
STATUS_PASSTHROUGH = "PASSTHROUGH"
STATUS_ITXT = "ITXT"
STATUS_ITXT_DROPPED = "ITXT_DROPPED"
STATUS_TERMINAL = "TERMINAL"
