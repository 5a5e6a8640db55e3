"""Tests for the path template parser."""

import pytest

from routehelpers import InvalidTemplate
from routehelpers.core.segments import (
    CatchAll,
    Dynamic,
    Static,
    VersionPlaceholder,
    dynamic_name,
    parse_path,
    parse_template,
)


def test_parse_versioned_template():
    assert parse_path("/api/:version/cats/:id(.json)") == (
        Static("api"),
        VersionPlaceholder(),
        Static("cats"),
        Dynamic("id"),
    )


@pytest.mark.parametrize(
    "template",
    [
        "/cats/:id",
        "/cats/{id}",
        "/cats/{id:int}",
        "/cats/:id(.:format)",
        "/cats/:id(/.:format)",
        "/cats/:id.:format",
        "/cats/:id(.json)",
        "cats/:id/",
    ],
)
def test_equivalent_spellings_give_same_segments(template):
    assert parse_path(template) == (Static("cats"), Dynamic("id"))


def test_raw_token_is_kept_but_not_compared():
    (segment,) = parse_path("/{id}")
    assert segment.raw == "{id}"
    assert segment == Dynamic("id")
    assert Dynamic("id").raw == ":id"


def test_literal_format_is_reported():
    assert parse_template("/cats(.xml)").format == "xml"
    assert parse_template("/cats(/.json)").format == "json"
    assert parse_template("/cats(.:format)").format is None
    assert parse_template("/cats").format is None


def test_version_placeholder_spellings():
    assert parse_path("/{version}/ping") == parse_path("/:version/ping")
    assert parse_path("/:version/ping")[0] == VersionPlaceholder()


def test_catch_all_spellings():
    assert parse_path("/files/*path") == (Static("files"), CatchAll("path"))
    assert parse_path("/files/{rest:path}") == (Static("files"), CatchAll("rest"))
    assert parse_path("/files/*") == (Static("files"), CatchAll(""))
    assert CatchAll("path").raw == "*path"


@pytest.mark.parametrize("template", ["", "/", "(.json)", "/(.:format)"])
def test_root_templates_have_no_segments(template):
    assert parse_path(template) == ()


@pytest.mark.parametrize(
    "template",
    [
        "/cats/{id",
        "/cats/id}",
        "/cats/a{b",
        "/cats/{a{b}}",
        "/cats(/:id)",
        "/cats/:",
        "/cats/{}",
        "/cats/:1d",
        "/cats/:id-x",
        "/files/a*b",
        "/files/*a-b",
    ],
)
def test_invalid_templates(template):
    with pytest.raises(InvalidTemplate) as excinfo:
        parse_path(template)
    assert excinfo.value.template == template
    assert isinstance(excinfo.value, ValueError)


def test_dynamic_name():
    assert dynamic_name(":id") == "id"
    assert dynamic_name("{id}") == "id"
    assert dynamic_name("{id:int}") == "id"
    assert dynamic_name("cats") is None
    assert dynamic_name(":") is None
    assert dynamic_name("{}") is None
