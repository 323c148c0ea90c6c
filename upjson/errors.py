from __future__ import annotations

from typing import Any

_UNSET: Any = object()


class UPJSONError(Exception):
    """
    Base class for every failure raised by a store operation.

    `expected` / `received` carry optional context, e.g. the file extension that was
    required versus the one that was given.
    """

    def __init__(self, message: str, *, expected: Any = _UNSET, received: Any = _UNSET) -> None:
        self.message = message
        self.expected = None if expected is _UNSET else expected
        self.received = None if received is _UNSET else received
        self._has_context = expected is not _UNSET or received is not _UNSET
        super().__init__(str(self))

    def __str__(self) -> str:
        text = self.message.rstrip(".") + "."
        if self._has_context:
            text += f" Expected: {self.expected}. Received: {self.received}."
        return text


class InvalidFormat(UPJSONError):
    """The store path does not point at a .json file."""


class InvalidKey(UPJSONError):
    """Missing/empty/reserved key, or a key the operation needs that is not stored."""


class InvalidValue(UPJSONError):
    """Missing or non JSON-serializable value."""


class NotInitialized(UPJSONError):
    """Operation attempted before init() set the marker."""


class NotFound(UPJSONError):
    """Lookup or search yielded nothing."""


class IllegalOperation(UPJSONError):
    """Operation does not apply to the stored value's type."""


class ValidationError(UPJSONError):
    """Malformed search options."""


class StorageError(UPJSONError):
    """The backing file could not be read, decoded or written."""
