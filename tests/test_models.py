from __future__ import annotations

import pytest

from upjson import Entry, SearchOptions, UPJSONError, ValidationError


def test_search_options_accepts_both_spellings():
    by_alias = SearchOptions.coerce({"function": str.isdigit, "findAll": True})
    by_name = SearchOptions.coerce({"function": str.isdigit, "find_all": True})
    assert by_alias.find_all is True
    assert by_name.find_all is True


def test_search_options_instance_passes_through():
    opts = SearchOptions(function=bool, find_all=False)
    assert SearchOptions.coerce(opts) is opts


def test_search_options_matches_coerces_to_bool():
    opts = SearchOptions(function=len, find_all=True)
    assert opts.matches("abc") is True
    assert opts.matches("") is False


def test_search_options_error_context():
    with pytest.raises(ValidationError) as exc:
        SearchOptions.coerce({"findAll": 1})
    assert isinstance(exc.value, UPJSONError)
    assert exc.value.received == ["findAll"]
    assert "Expected:" in str(exc.value)


def test_entry_default_value():
    assert Entry(key="k").value is None
    assert Entry(key="k", value=[1]).model_dump() == {"key": "k", "value": [1]}


def test_error_message_without_context():
    err = UPJSONError("Something went wrong.")
    assert str(err) == "Something went wrong."
    assert err.expected is None
