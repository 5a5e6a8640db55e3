"""Core runtime aggregator (source of truth).

Purpose: expose the compiler and registry building blocks from a single
module. No extra logic beyond imports/exports.

Guarantees
----------
- Importing this module performs only imports; it does not register plugins
  or decorate routes.
- Public API mirrors the underlying modules:
  * ``segments`` → ``parse_path`` and the segment types
  * ``naming`` → ``sanitize_method_name``, ``derive_helper_names``
  * ``resolver`` → ``resolve_path``
  * ``decorated_route`` → ``DecoratedRoute``, ``decorate_routes``
  * ``base_registry`` → ``BaseRegistry`` (plugin-free)
  * ``registry`` → ``Registry`` (plugin-enabled)
  * ``namespace`` → ``PathHelpers`` mixin
"""

from .base_registry import BaseRegistry
from .decorated_route import DecoratedRoute, decorate_routes
from .descriptor import RouteDescriptor
from .errors import InvalidTemplate, MissingArgument, RouteHelperError
from .namespace import PathHelpers
from .naming import derive_helper_names, path_helper_name, sanitize_method_name
from .registry import Registry
from .resolver import resolve_path
from .segments import CatchAll, Dynamic, Static, VersionPlaceholder, parse_path

__all__ = [
    "BaseRegistry",
    "CatchAll",
    "DecoratedRoute",
    "Dynamic",
    "InvalidTemplate",
    "MissingArgument",
    "PathHelpers",
    "Registry",
    "RouteDescriptor",
    "RouteHelperError",
    "Static",
    "VersionPlaceholder",
    "decorate_routes",
    "derive_helper_names",
    "parse_path",
    "path_helper_name",
    "resolve_path",
    "sanitize_method_name",
]
