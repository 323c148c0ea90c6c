from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from .errors import StorageError


def encode_document(doc: dict[str, Any], *, indent: int | None = None) -> bytes:
    """
    Serialize a document for disk. Key order is kept as inserted.

    Raises ValueError/TypeError for content that is not strict JSON.
    """
    text = json.dumps(doc, indent=indent, ensure_ascii=False, allow_nan=False)
    return (text + "\n").encode("utf-8")


def decode_document(raw: bytes, path: Path) -> dict[str, Any]:
    """
    Parse file content into a document.

    Empty files decode to an empty document. Anything that is not a JSON object fails.
    """
    try:
        text = raw.decode("utf-8")
        if not text.strip():
            return {}
        doc = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StorageError(f"Could not decode {path}: {e}") from e
    if not isinstance(doc, dict):
        raise StorageError(
            f"Document at {path} is not a JSON object",
            expected="object",
            received=type(doc).__name__,
        )
    return doc


def atomic_write_bytes(path: Path, data: bytes, *, fsync: bool = True) -> None:
    """
    Atomically write bytes to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("wb") as f:
        f.write(data)
        f.flush()
        if fsync:
            os.fsync(f.fileno())
    tmp_path.replace(path)
