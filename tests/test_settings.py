from __future__ import annotations

import os

import pytest

from upjson import DiskFileSystem, Store, get_settings, open_async_store, open_store
from upjson.settings import DEFAULT_DB_PATH


def test_defaults(clean_env):
    settings = get_settings()
    assert settings.path == DEFAULT_DB_PATH
    assert settings.indent is None
    assert settings.fsync is True
    assert settings.debug_log_operations is False


def test_env_overrides(clean_env, tmp_path):
    clean_env.setenv("UPJSON_PATH", str(tmp_path / "x.json"))
    clean_env.setenv("UPJSON_INDENT", "4")
    clean_env.setenv("UPJSON_FSYNC", "off")
    clean_env.setenv("UPJSON_DEBUG_LOG_OPERATIONS", "yes")
    settings = get_settings()
    assert settings.path == str(tmp_path / "x.json")
    assert settings.indent == 4
    assert settings.fsync is False
    assert settings.debug_log_operations is True


def test_bad_indent(clean_env):
    clean_env.setenv("UPJSON_INDENT", "wide")
    with pytest.raises(ValueError):
        get_settings()


def test_open_store_explicit_path_wins(clean_env, tmp_path):
    clean_env.setenv("UPJSON_PATH", str(tmp_path / "env.json"))
    s = open_store(tmp_path / "explicit.json", env_file=None)
    assert isinstance(s, Store)
    assert s.path == tmp_path / "explicit.json"


def test_open_store_reads_env_file(clean_env, tmp_path):
    # load_dotenv writes into os.environ; give it a throwaway mapping.
    clean_env.setattr(os, "environ", dict(os.environ))
    env_file = tmp_path / "local.env"
    env_file.write_text(f"UPJSON_PATH={tmp_path / 'from_env.json'}\nUPJSON_INDENT=2\n", encoding="utf-8")

    s = open_store(env_file=str(env_file))
    assert s.path == tmp_path / "from_env.json"
    s.init()
    assert (tmp_path / "from_env.json").read_text(encoding="utf-8").startswith("{\n  ")


def test_open_async_store_wraps_store(clean_env, tmp_path):
    a = open_async_store(tmp_path / "db.json", env_file=None)
    assert a.store.path == tmp_path / "db.json"


def test_debug_logging(caplog, db_path):
    s = Store(db_path, file_system=DiskFileSystem(fsync=False), debug_log_operations=True)
    with caplog.at_level("DEBUG", logger="upjson.store"):
        s.init()
        s.set("a", 1)
        s.get("a")
    messages = [r.getMessage() for r in caplog.records]
    assert any("UPJSON INIT" in m for m in messages)
    assert any("UPJSON SET" in m and "(0 keys)" in m for m in messages)
    assert any("UPJSON GET" in m and "(1 keys)" in m for m in messages)
