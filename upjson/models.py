from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictBool

from .errors import ValidationError


class SearchOptions(BaseModel):
    """
    Per-call search parameters for find() and filter():
      { "function": <callable returning bool>, "findAll": <bool> }
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    function: Callable[[Any], Any]
    find_all: StrictBool = Field(alias="findAll")

    @classmethod
    def coerce(cls, options: Any) -> "SearchOptions":
        if isinstance(options, SearchOptions):
            return options
        if not isinstance(options, Mapping):
            raise ValidationError(
                "The search options were of wrong format",
                expected="SearchOptions or mapping",
                received=type(options).__name__,
            )
        try:
            return cls.model_validate(dict(options))
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"The search options were of wrong format: {e.error_count()} error(s)",
                expected="{function: callable, findAll: bool}",
                received=sorted(str(k) for k in options.keys()),
            ) from e

    def matches(self, candidate: Any) -> bool:
        return bool(self.function(candidate))


class Entry(BaseModel):
    key: str
    value: Any = None
