"""Tests for path resolution and option handling."""

from enum import Enum

import pytest

from routehelpers import MissingArgument
from routehelpers.core.resolver import (
    format_extension,
    normalize_key,
    normalize_options,
    path_segments_with_values,
    resolve_path,
    to_query,
)
from routehelpers.core.segments import parse_path

SHOW = parse_path("/api/:version/cats/:id")
PING = parse_path("/:version/ping")
FILES = parse_path("/files/*rest")


class Key(Enum):
    ID = "id"
    NUMBER = 3


def test_resolve_dynamic_segment():
    assert resolve_path(SHOW, "v1", {"id": 5}) == "/api/v1/cats/5.json"


def test_zero_is_a_value():
    assert resolve_path(SHOW, "v1", {"id": 0}) == "/api/v1/cats/0.json"


@pytest.mark.parametrize("options", [{}, {"id": None}, {"id": ""}])
def test_missing_argument(options):
    with pytest.raises(MissingArgument) as excinfo:
        resolve_path(SHOW, "v1", options, helper_name="api_v1_cats_path")
    assert excinfo.value.argument == "id"
    assert str(excinfo.value) == "Missing argument 'id' for api_v1_cats_path"
    assert isinstance(excinfo.value, LookupError)


def test_default_format_can_be_disabled():
    assert resolve_path(PING, "alpha", default_format=None) == "/alpha/ping"


def test_unversioned_placeholder_is_dropped():
    assert resolve_path(PING) == "/ping.json"


def test_explicit_format_wins():
    assert resolve_path(PING, "v1", {"format": "xml"}, default_format=None) == "/v1/ping.xml"
    assert resolve_path(PING, "v1", {"format": ".csv"}) == "/v1/ping.csv"


def test_catch_all_suppresses_default_format_only():
    assert resolve_path(FILES) == "/files"
    assert resolve_path(FILES, options={"format": "txt"}) == "/files.txt"


def test_root_path():
    assert resolve_path(()) == "/.json"
    assert resolve_path((), default_format=None) == "/"


def test_params_mapping_keeps_order():
    path = resolve_path(PING, "v1", {"params": {"b": 1, "a": 2}})
    assert path == "/v1/ping.json?b=1&a=2"


def test_params_are_escaped_and_flattened():
    params = {"q": "a b&c", "filter": {"color": "red"}, "ids": [1, 2], "flag": True, "empty": None}
    assert to_query(params) == (
        "q=a+b%26c&filter%5Bcolor%5D=red&ids%5B%5D=1&ids%5B%5D=2&flag=true&empty="
    )


def test_empty_params_mapping_adds_nothing():
    assert resolve_path(PING, "v1", {"params": {}}) == "/v1/ping.json"


def test_scalar_params():
    assert resolve_path(PING, "v1", {"params": "raw=1"}) == "/v1/ping.json?raw=1"
    assert resolve_path(PING, "v1", {"params": 1}) == "/v1/ping.json?1"


def test_options_are_not_mutated():
    options = {"id": 1, "params": {"page": 2}}
    resolve_path(SHOW, "v1", options)
    assert options == {"id": 1, "params": {"page": 2}}


def test_normalize_key():
    assert normalize_key(Key.ID) == "id"
    assert normalize_key(Key.NUMBER) == "NUMBER"
    assert normalize_key(b"id") == "id"
    assert normalize_key(7) == "7"


def test_normalize_options_keywords_win():
    assert normalize_options({Key.ID: 1, "format": "xml"}, id=2) == {"id": 2, "format": "xml"}


def test_normalize_options_rejects_non_mapping():
    with pytest.raises(TypeError):
        normalize_options([("id", 1)])


def test_enum_key_resolves():
    assert resolve_path(SHOW, "v1", {Key.ID: 9}) == "/api/v1/cats/9.json"


def test_format_extension():
    assert format_extension("xml") == ".xml"
    assert format_extension(".xml") == ".xml"
    assert format_extension("") == ""
    assert format_extension(None) == ""


def test_path_segments_with_values():
    assert path_segments_with_values(SHOW, "v1", {"id": 4}) == ["api", "v1", "cats", 4]
    assert path_segments_with_values(SHOW, None, {"id": ""}) == ["api", "cats"]
