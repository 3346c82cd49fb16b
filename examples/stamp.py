"""Stamp a PNG with the current time as iTXt metadata and list what it holds."""
from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

from pngitxt_store import ChunkStore


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python stamp.py <file.png> [key]")
        print("Example: python stamp.py out.png time")
        sys.exit(1)

    path = Path(sys.argv[1])
    key = sys.argv[2] if len(sys.argv) > 2 else "time"

    with open(path, "rb") as f:
        store = ChunkStore(f)

    for k, v in sorted(store.get_all().items()):
        print(f"{k} ---- {v.decode('utf-8', 'replace')}")

    stamp = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    store.set(key, stamp.encode("utf-8"))

    path.write_bytes(store.to_bytes())
    print(f"STAMPED: {path} {key}={stamp}")


if __name__ == "__main__":
    main()
