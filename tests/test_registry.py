"""Tests for BaseRegistry/Registry registration, lookup and installation."""

from types import SimpleNamespace

import pytest

from routehelpers import DecoratedRoute, InvalidTemplate, PathHelpers, Registry
from routehelpers.core.base_registry import BaseRegistry

CATS_INDEX = {"path": "/api/:version/cats(.json)", "version": "v1", "method": "GET"}
CATS_CREATE = {"path": "/api/:version/cats(.json)", "version": "v1", "method": "POST"}
CATS_SHOW = {"path": "/api/:version/cats/:id(.json)", "version": "v1"}
PING = {"path": "/:version/ping(.:format)", "versions": ["alpha", "beta"], "format": None}


def test_registry_collects_helpers():
    registry = Registry(name="paths", routes=[CATS_SHOW, PING])
    assert registry.entries() == ("api_v1_cats_path", "alpha_ping_path", "beta_ping_path")
    assert len(registry) == 3
    assert "beta_ping_path" in registry
    assert "gamma_ping_path" not in registry
    assert registry.get("api_v1_cats_path")(id=3) == "/api/v1/cats/3.json"
    assert registry["alpha_ping_path"]() == "/alpha/ping"
    assert registry.call("beta_ping_path") == "/beta/ping"
    assert repr(registry) == "Registry(name='paths', helpers=3)"


def test_base_registry_without_plugins():
    registry = BaseRegistry(name="plain").add_route(CATS_SHOW)
    assert registry.get("api_v1_cats_path")({"id": 8}) == "/api/v1/cats/8.json"
    assert [route.path for route in registry.routes()] == [CATS_SHOW["path"]]


def test_add_route_accepts_decorated_route():
    route = DecoratedRoute(PING)
    registry = Registry().add_route(route)
    assert registry.routes()[0] is route


def test_add_route_surfaces_invalid_template():
    with pytest.raises(InvalidTemplate):
        Registry().add_route({"path": "/cats/{id", "version": "v1"})


def test_collision_raises_and_leaves_registry_unchanged():
    registry = Registry(routes=[CATS_INDEX])
    with pytest.raises(ValueError, match="Helper name collision: api_v1_cats_path"):
        registry.add_route(CATS_SHOW)
    assert len(registry.routes()) == 1
    assert registry.get("api_v1_cats_path")() == "/api/v1/cats.json"


def test_collision_with_replace_keeps_latest():
    registry = Registry(routes=[CATS_INDEX, CATS_SHOW], replace=True)
    assert registry.get("api_v1_cats_path")(id=1) == "/api/v1/cats/1.json"


def test_same_path_different_verbs_share_helper():
    registry = Registry(routes=[CATS_INDEX, CATS_CREATE])
    assert registry.entries() == ("api_v1_cats_path",)
    info = registry.members()["entries"]["api_v1_cats_path"]
    assert info["verbs"] == ["GET", "POST"]
    assert info["path"] == "/api/:version/cats(.json)"
    assert info["version"] == "v1"
    assert info["arguments"] == []


def test_members_filters():
    registry = Registry(name="paths", routes=[CATS_CREATE, PING])
    assert set(registry.members()["entries"]) == {
        "api_v1_cats_path",
        "alpha_ping_path",
        "beta_ping_path",
    }
    assert list(registry.members(verb="post")["entries"]) == ["api_v1_cats_path"]
    assert list(registry.members(version="beta")["entries"]) == ["beta_ping_path"]
    assert registry.members(verb="DELETE") == {}
    overview = registry.members(version="alpha")
    assert overview["name"] == "paths"
    assert overview["registry"] is registry


def test_members_filter_types():
    registry = Registry(routes=[PING])
    with pytest.raises(TypeError):
        registry.members(verb=1)
    with pytest.raises(TypeError):
        registry.members(version=["alpha"])


def test_empty_registry_members():
    assert Registry().members() == {}


def test_get_unknown_helper():
    registry = Registry(name="paths")
    with pytest.raises(NotImplementedError, match="not found in registry 'paths'"):
        registry.get("nope_path")


def test_get_default_handler():
    registry = Registry(get_default_handler=lambda *args, **kwargs: "/fallback")
    assert registry.get("nope_path")() == "/fallback"
    assert registry.get("nope_path", default_handler=lambda: "/other")() == "/other"


def test_install_on_namespace():
    registry = Registry(routes=[CATS_SHOW, PING])
    target = registry.install(SimpleNamespace())
    assert target.api_v1_cats_path(id=2) == "/api/v1/cats/2.json"
    assert target.beta_ping_path() == "/beta/ping"
    # Reinstalling the same registry is allowed.
    registry.install(target)


def test_install_on_class():
    class Urls:
        pass

    Registry(routes=[CATS_SHOW]).install(Urls)
    assert Urls.api_v1_cats_path(id=5) == "/api/v1/cats/5.json"
    assert Urls().api_v1_cats_path(id=6) == "/api/v1/cats/6.json"


def test_install_refuses_foreign_attributes():
    target = SimpleNamespace(alpha_ping_path="taken")
    registry = Registry(routes=[PING])
    with pytest.raises(ValueError, match="Cannot install 'alpha_ping_path'"):
        registry.install(target)
    registry.install(target, replace=True)
    assert target.alpha_ping_path() == "/alpha/ping"


def test_install_refuses_other_registry_helpers():
    target = Registry(routes=[PING]).install(SimpleNamespace())
    with pytest.raises(ValueError):
        Registry(routes=[PING]).install(target)


def test_installed_helpers_pick_up_later_plugins():
    calls = []

    class Logger:
        def hasHandlers(self):
            return True

        def info(self, message):
            calls.append(message)

    registry = Registry(routes=[PING])
    target = registry.install(SimpleNamespace())
    registry.plug("logging", logger=Logger(), before=False)
    assert target.alpha_ping_path() == "/alpha/ping"
    assert len(calls) == 1
    assert calls[0].startswith("alpha_ping_path -> /alpha/ping (")


class Api(PathHelpers):
    def __init__(self):
        self.paths = Registry(self, name="paths", routes=[CATS_SHOW])
        self.pings = Registry(self, name="pings", routes=[PING])


def test_path_helpers_mixin():
    api = Api()
    assert api.api_v1_cats_path(id=1) == "/api/v1/cats/1.json"
    assert api.alpha_ping_path() == "/alpha/ping"
    assert api.path_helper_names() == ("api_v1_cats_path", "alpha_ping_path", "beta_ping_path")
    assert api.path_registry("pings") is api.pings


def test_path_helpers_mixin_unknown_names():
    api = Api()
    with pytest.raises(AttributeError):
        api.gamma_ping_path
    with pytest.raises(AttributeError):
        api.something_else
    with pytest.raises(AttributeError):
        api.path_registry("missing")


def test_path_helpers_mixin_registers_once():
    api = Api()
    api._register_registry(api.paths)
    assert api.path_helper_names() == ("api_v1_cats_path", "alpha_ping_path", "beta_ping_path")


def test_path_helpers_without_registries():
    class Empty(PathHelpers):
        pass

    empty = Empty()
    assert empty.path_helper_names() == ()
    with pytest.raises(AttributeError):
        empty.root_path
