#!/usr/bin/env python3
"""
Tests for the query-string and JSON body encoding helpers.
"""

import json

import pytest

from rexster_client.utils.client_utils import (
    InvalidConfigError,
    TransportError,
    append_query_string,
    build_query_string,
    encode_json_body,
    normalize_base_url,
    require_non_empty,
)


def test_query_string_skips_none_and_encodes_booleans():
    assert build_query_string({"a": None, "b": True, "c": False, "d": 3}) == "b=1&c=0&d=3"


def test_query_string_form_encodes_reserved_characters():
    assert build_query_string({"q": "name,age", "s": "a b&c"}) == "q=name%2Cage&s=a+b%26c"


def test_query_string_expands_lists_and_mappings():
    query = build_query_string({"ids": [1, 2], "props": {"name": "marko"}})
    assert query == "ids%5B0%5D=1&ids%5B1%5D=2&props%5Bname%5D=marko"


@pytest.mark.parametrize("data", [None, {}])
def test_query_string_empty(data):
    assert build_query_string(data) == ""


def test_append_query_string_picks_separator():
    assert append_query_string("http://h/g", "a=1") == "http://h/g?a=1"
    assert append_query_string("http://h/g?a=1", "b=2") == "http://h/g?a=1&b=2"
    assert append_query_string("http://h/g", "") == "http://h/g"


def test_json_body_drops_none_values_only():
    body = encode_json_body({"a": 1, "b": None, "c": "x", "d": 0, "e": "", "f": [1, None]})
    assert json.loads(body) == {"a": 1, "c": "x", "d": 0, "e": "", "f": [1, None]}


def test_json_body_of_empty_mapping():
    assert encode_json_body({}) == "{}"


def test_normalize_base_url():
    assert normalize_base_url(" http://h:8182// ") == "http://h:8182/graphs"
    with pytest.raises(InvalidConfigError):
        normalize_base_url("  ")


def test_require_non_empty_trims():
    assert require_non_empty("  g  ", "bad") == "g"
    with pytest.raises(InvalidConfigError, match="bad"):
        require_non_empty("", "bad")


def test_transport_error_message_bundles_diagnostics():
    error = TransportError("GET", "http://h/graphs/g", "timed out", status_code=502,
                           request_options={"timeout": (None, 3600)}, payload={"a": 1})
    message = str(error)
    assert "GET request to http://h/graphs/g failed" in message
    assert "Response Code: 502" in message
    assert "timed out" in message
    assert "(None, 3600)" in message
    assert "{'a': 1}" in message
    assert error.status_code == 502


def test_json_body_is_compact():
    body = encode_json_body({"a": 1, "b": None, "c": "x", "d": [1, 2]})
    assert body == '{"a":1,"c":"x","d":[1,2]}'
