from __future__ import annotations

import contextlib
import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Iterator

from .disk_store import DiskFileSystem
from .errors import (
    IllegalOperation,
    InvalidFormat,
    InvalidKey,
    InvalidValue,
    NotFound,
    NotInitialized,
    StorageError,
)
from .interfaces import FileSystem
from .json_store import decode_document, encode_document
from .locks import WRITER_LOCKS
from .models import Entry, SearchOptions
from .settings import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

MARKER_KEY = "initialized"
EXPECTED_EXTENSION = ".json"

_MISSING: Any = object()
_LEADING_INT_RE = re.compile(r"\s*[+-]?\d+")


def _json_type(value: Any) -> str:
    if value is _MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_step(value: Any) -> int:
    """
    Integer step for add()/subtract(). Numeric strings are read up to the first
    non-digit ("12px" -> 12); anything unparsable counts as 1.
    """
    if value is None or isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 1
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        if m:
            return int(m.group(0))
    return 1


def _check_key(key: Any) -> str:
    if not isinstance(key, str) or not key:
        raise InvalidKey("Key not given", expected="non-empty string", received=key)
    if key == MARKER_KEY:
        raise InvalidKey("Key is reserved by the store", expected="any other key", received=key)
    return key


def _find_non_str_key(value: Any) -> Any:
    """Return the first mapping key anywhere in value that is not a str, else _MISSING."""
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                return k
            found = _find_non_str_key(v)
            if found is not _MISSING:
                return found
    elif isinstance(value, (list, tuple)):
        for item in value:
            found = _find_non_str_key(item)
            if found is not _MISSING:
                return found
    return _MISSING


def _check_value(value: Any) -> Any:
    if value is _MISSING:
        raise InvalidValue("Value not given", expected="any JSON value", received=None)
    # json.dumps would quietly turn these into strings and break the round trip.
    bad_key = _find_non_str_key(value)
    if bad_key is not _MISSING:
        raise InvalidValue(
            f"Object keys must be strings, got {bad_key!r}",
            expected="str key",
            received=type(bad_key).__name__,
        )
    try:
        json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidValue(
            f"Value is not JSON-serializable ({e})",
            expected="JSON value",
            received=type(value).__name__,
        ) from e
    return value


class Store:
    """
    A key-value store persisted as one JSON object in one file.

    The file is the only source of truth: each operation loads the whole document,
    applies one change, and writes the whole document back before returning. All
    operations on the same path are serialized through a shared per-path lock.

    The reserved "initialized" key marks a store that init() has prepared; it never
    shows up in keys()/values()/all()/count() and cannot be written by callers.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_DB_PATH,
        *,
        file_system: FileSystem | None = None,
        indent: int | None = None,
        debug_log_operations: bool = False,
    ) -> None:
        self._path = Path(path)
        self._fs = file_system if file_system is not None else DiskFileSystem()
        self._indent = indent
        self._debug_log_operations = debug_log_operations

    def __repr__(self) -> str:
        return f"<Store@{self._path}>"

    @property
    def path(self) -> Path:
        return self._path

    # -------------------------------------------------------------------
    # read / write cycle
    # -------------------------------------------------------------------

    def _lock(self):
        return WRITER_LOCKS.writer(self._path)

    def _load(self) -> dict[str, Any]:
        if not self._fs.exists(self._path):
            return {}
        return decode_document(self._fs.read_all(self._path), self._path)

    def _save(self, doc: dict[str, Any]) -> str:
        """Persist the full document and return it serialized."""
        try:
            data = encode_document(doc, indent=self._indent)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Could not encode document for {self._path}: {e}") from e
        try:
            self._fs.write_all(self._path, data)
        except StorageError as e:
            logger.warning("UPJSON SAVE: failed to write %s: %s", self._path, e)
            raise
        return data.decode("utf-8").rstrip("\n")

    @contextlib.contextmanager
    def _document(self, operation: str) -> Iterator[dict[str, Any]]:
        """
        Hold the path lock and yield the loaded document, failing if init() has not run.
        """
        with self._lock():
            doc = self._load()
            if doc.get(MARKER_KEY) is not True:
                raise NotInitialized(f"Please initialize the db before calling {operation}()")
            if self._debug_log_operations:
                logger.debug("UPJSON %s: %s (%d keys)", operation.upper(), self._path, len(self._user_items(doc)))
            yield doc

    @staticmethod
    def _user_items(doc: dict[str, Any]) -> list[tuple[str, Any]]:
        return [(k, v) for k, v in doc.items() if k != MARKER_KEY]

    # -------------------------------------------------------------------
    # initialization
    # -------------------------------------------------------------------

    def init(self) -> bool:
        """
        Prepare the file: create it if needed and set the marker. Safe to call again.
        """
        extension = self._fs.extension_of(self._path)
        if extension != EXPECTED_EXTENSION:
            raise InvalidFormat(
                "The file you've specified a path to is of wrong type",
                expected=EXPECTED_EXTENSION,
                received=extension or "(none)",
            )
        with self._lock():
            if not self._fs.exists(self._path):
                logger.info("UPJSON INIT: creating %s", self._path)
                self._save({})
            doc = self._load()
            if doc.get(MARKER_KEY) is not True:
                doc[MARKER_KEY] = True
                self._save(doc)
                logger.info("UPJSON INIT: initialized %s", self._path)
            return doc[MARKER_KEY]

    # -------------------------------------------------------------------
    # primitive accessors
    # -------------------------------------------------------------------

    def set(self, key: str, value: Any = _MISSING) -> str:
        """Store value under key, overwriting. Returns the new document serialized."""
        _check_key(key)
        _check_value(value)
        with self._document("set") as doc:
            doc[key] = value
            return self._save(doc)

    def get(self, key: str) -> Any:
        _check_key(key)
        with self._document("get") as doc:
            if key not in doc:
                raise NotFound(f"No value was found for key {key!r}")
            return doc[key]

    # -------------------------------------------------------------------
    # mutators
    # -------------------------------------------------------------------

    def push(self, key: str, value: Any = _MISSING) -> str:
        """
        Append value to the array at key; a list/tuple value is concatenated instead.
        Returns the new document serialized, like set().
        """
        _check_key(key)
        _check_value(value)
        with self._document("push") as doc:
            if key not in doc:
                raise InvalidKey("Key doesn't exist on the db", expected="existing key", received=key)
            base = doc[key]
            if not isinstance(base, list):
                raise IllegalOperation(
                    f"Cannot perform push operation on element of type {_json_type(base)}",
                    expected="array",
                    received=_json_type(base),
                )
            if isinstance(value, (list, tuple)):
                doc[key] = base + list(value)
            else:
                base.append(value)
            return self._save(doc)

    def add(self, key: str, value: Any = 1) -> dict[str, Any]:
        return self._increment(key, _parse_step(value), "add")

    def subtract(self, key: str, value: Any = 1) -> dict[str, Any]:
        return self._increment(key, -_parse_step(value), "subtract")

    def _increment(self, key: str, step: int, operation: str) -> dict[str, Any]:
        _check_key(key)
        with self._document(operation) as doc:
            current = doc.get(key, _MISSING)
            if not _is_number(current):
                raise IllegalOperation(
                    f"The data you want to {operation} to is of type {_json_type(current)}. Only numbers allowed",
                    expected="number",
                    received=_json_type(current),
                )
            try:
                result = current + step
            except OverflowError as e:
                raise IllegalOperation(
                    f"Cannot {operation} {step} to {current}: {e}",
                    expected="finite number",
                    received="overflow",
                ) from e
            if isinstance(result, float) and not math.isfinite(result):
                raise IllegalOperation(
                    f"Cannot {operation} {step} to {current}: result is not finite",
                    expected="finite number",
                    received=result,
                )
            doc[key] = result
            self._save(doc)
            return doc

    def delete(self, key: str) -> dict[str, Any]:
        """Remove key. Irreversible. Returns the resulting document."""
        _check_key(key)
        with self._document("delete") as doc:
            if key not in doc:
                raise InvalidKey("Key does not exist", expected="existing key", received=key)
            del doc[key]
            self._save(doc)
            return doc

    def clear(self) -> bool:
        """
        Replace the document with an empty object. The marker goes too, so init()
        has to run again before the store is usable.
        """
        with self._document("clear"):
            self._save({})
            logger.info("UPJSON CLEAR: wiped %s", self._path)
            return True

    def filter(self, key: str, search_options: SearchOptions | dict[str, Any] | None = None) -> dict[str, Any]:
        """Keep only the elements of the array at key that satisfy the predicate."""
        _check_key(key)
        options = SearchOptions.coerce(search_options)
        with self._document("filter") as doc:
            if key not in doc:
                raise InvalidKey("No match to your key was found", expected="existing key", received=key)
            target = doc[key]
            if not isinstance(target, list):
                raise IllegalOperation(
                    f"Cannot perform filter operation on element of type {_json_type(target)}",
                    expected="array",
                    received=_json_type(target),
                )
            doc[key] = [element for element in target if options.matches(element)]
            self._save(doc)
            return doc

    # -------------------------------------------------------------------
    # queries
    # -------------------------------------------------------------------

    def find(self, search_options: SearchOptions | dict[str, Any] | None = None) -> Entry | list[Entry]:
        """
        Match the predicate against each key in stored order.

        With find_all=False the first matching entry is returned; otherwise every
        match, in order. No match at all raises NotFound.
        """
        options = SearchOptions.coerce(search_options)
        with self._document("find") as doc:
            results: list[Entry] = []
            for key, value in self._user_items(doc):
                if not options.matches(key):
                    continue
                entry = Entry(key=key, value=value)
                if not options.find_all:
                    return entry
                results.append(entry)
        if not results:
            raise NotFound("Nothing passes your tests including your search function")
        return results

    def keys(self) -> list[str]:
        with self._document("keys") as doc:
            return [k for k, _ in self._user_items(doc)]

    def values(self) -> list[Any]:
        with self._document("values") as doc:
            return [v for _, v in self._user_items(doc)]

    def all(self) -> list[Entry]:
        with self._document("all") as doc:
            return [Entry(key=k, value=v) for k, v in self._user_items(doc)]

    def has(self, key: str) -> bool:
        _check_key(key)
        with self._document("has") as doc:
            return key in doc

    def ensure(self, key: str, value: Any = _MISSING) -> bool | str:
        """
        Return True if key is stored; otherwise set it to value and return set()'s result.
        """
        _check_key(key)
        with self._lock():
            if self.has(key):
                return True
            if value is _MISSING:
                raise InvalidValue(
                    "The key does not exist but no value was given",
                    expected="any JSON value",
                    received=None,
                )
            return self.set(key, value)

    def count(self) -> int:
        with self._document("count") as doc:
            return len(self._user_items(doc))
