import json
from pathlib import Path

import click

from pngitxt_core.protocol import KEY_ENCODING, KEY_ERRORS

from .errors import ChunkStoreError
from .store import ChunkStore

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}

_PNG_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def _echo(obj) -> None:
    click.echo(json.dumps(obj, **CANONICAL_JSON_KW))


def _text(value: bytes) -> str:
    return value.decode("utf-8", "replace")


def _load(path: Path) -> ChunkStore:
    try:
        with open(path, "rb") as f:
            return ChunkStore(f)
    except ChunkStoreError as e:
        # Fail closed with a single-line reason.
        _echo({"status": "FAIL", "path": str(path), **e.to_dict()})
        raise SystemExit(1)


def _save(store: ChunkStore, path: Path) -> None:
    """Atomic write to target path."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp, "wb") as f:
            store.write(f)
        tmp.replace(path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


@click.group()
def main():
    pass


@main.command("list")
@click.argument("path", type=_PNG_PATH)
def list_cmd(path: Path):
    store = _load(path)
    entries = {k: _text(v) for k, v in store.get_all().items()}
    _echo({"status": "PASS", "entries": entries})


@main.command("get")
@click.argument("path", type=_PNG_PATH)
@click.argument("key")
def get_cmd(path: Path, key: str):
    value = _load(path).get(key)
    if value is None:
        _echo({"status": "FAIL", "code": "E_KEY_MISSING", "key": key})
        raise SystemExit(1)
    click.echo(_text(value))


@main.command("set")
@click.argument("path", type=_PNG_PATH)
@click.argument("key")
@click.argument("value")
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), help="Write here instead of in place")
def set_cmd(path: Path, key: str, value: str, out: Path | None):
    store = _load(path)
    store.set(key, value.encode(KEY_ENCODING, KEY_ERRORS))
    _save(store, out or path)
    _echo({"status": "PASS", "key": key, "path": str(out or path)})


@main.command("delete")
@click.argument("path", type=_PNG_PATH)
@click.argument("key")
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), help="Write here instead of in place")
def delete_cmd(path: Path, key: str, out: Path | None):
    store = _load(path)
    existed = key in store
    store.delete(key)
    _save(store, out or path)
    _echo({"status": "PASS", "key": key, "deleted": existed, "path": str(out or path)})


@main.command("chunks")
@click.argument("path", type=_PNG_PATH)
def chunks_cmd(path: Path):
    store = _load(path)
    _echo({
        "status": "PASS",
        "chunks": [c.to_dict() for c in store.chunks],
        "stats": store.get_scan_stats(),
    })


if __name__ == "__main__":
    main()
