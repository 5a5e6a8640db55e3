"""Route tables shared by the test-suite."""

import pytest

from routehelpers import DecoratedRoute, decorate_routes

API_ROUTES = [
    {
        "method": "GET",
        "route_path": "/api/:version/cats(.json)",
        "route_namespace": "/cats",
        "route_version": "v1",
    },
    {
        "method": "GET",
        "route_path": "/api/:version/cats/:id(.json)",
        "route_namespace": "/cats/:id",
        "route_version": "v1",
    },
    {
        "method": "GET",
        "route_path": "/api/:version/custom_name(.json)",
        "route_namespace": "/custom_name",
        "route_version": "v1",
        "as": "my_custom_route_name",
    },
    {
        "method": "GET",
        "route_path": "/api/:version/*path(.json)",
        "route_namespace": "/",
        "route_version": "v1",
    },
]

MULTIPLE_VERSIONS_ROUTES = [
    {
        "method": "GET",
        "route_path": "/:version/ping(.:format)",
        "route_namespace": "/ping",
        "route_version": ["alpha", "beta", "v1"],
        "format": None,
    },
]

MULTIPLE_POSTS_ROUTES = [
    {
        "method": "POST",
        "route_path": "/api/:version/cats(.json)",
        "route_namespace": "/cats",
        "route_version": "v1",
    },
    {
        "method": "POST",
        "route_path": "/api/:version/cats/:id/feed(.json)",
        "route_namespace": "/cats/:id",
        "route_version": "v1",
    },
]


def find_route(routes, **criteria):
    for route in routes:
        if all(getattr(route, key) == value for key, value in criteria.items()):
            return route
    raise LookupError(f"No route matching {criteria}")


@pytest.fixture
def routes():
    return decorate_routes(API_ROUTES)


@pytest.fixture
def index_route(routes):
    return find_route(routes, namespace="/cats")


@pytest.fixture
def show_route(routes):
    return find_route(routes, namespace="/cats/:id")


@pytest.fixture
def catch_all_route(routes):
    return next(route for route in routes if "*" in route.path)


@pytest.fixture
def custom_route(routes):
    return next(route for route in routes if "custom_name" in route.path)


@pytest.fixture
def ping_route():
    return DecoratedRoute(MULTIPLE_VERSIONS_ROUTES[0])


@pytest.fixture
def post_routes():
    return decorate_routes(MULTIPLE_POSTS_ROUTES)
