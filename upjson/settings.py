from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_DB_PATH = "./data/db.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> int | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    # Storage
    path: str
    indent: int | None
    fsync: bool

    # Debug
    debug_log_operations: bool


def get_settings() -> Settings:
    path = os.getenv("UPJSON_PATH", "").strip() or DEFAULT_DB_PATH

    # Compact output unless an indent is asked for.
    indent = _env_int("UPJSON_INDENT")

    # Disabling fsync trades durability for speed (tests, throwaway stores).
    fsync = _env_bool("UPJSON_FSYNC", True)

    debug_log_operations = _env_bool("UPJSON_DEBUG_LOG_OPERATIONS", False)

    return Settings(
        path=path,
        indent=indent,
        fsync=fsync,
        debug_log_operations=debug_log_operations,
    )
