"""routehelpers public API surface (source of truth).

Recreate the module with these rules:
- Public exports: ``DecoratedRoute``, ``RouteDescriptor``, ``Registry``,
  ``PathHelpers``, the two error types and ``decorate_routes``.
- Plugin registration: import built-in plugins (``logging``, ``pydantic``) for
  their side effect of calling ``Registry.register_plugin(<class>)``.
  Imports are done lazily via ``import_module`` to avoid cycles.

Constraints
-----------
- Import must stay lightweight: no registry instantiation or route
  decoration beyond plugin registration.
- Version string lives here as ``__version__``.
"""

from importlib import import_module

__version__ = "0.3.0"

from .core import (
    DecoratedRoute,
    InvalidTemplate,
    MissingArgument,
    PathHelpers,
    Registry,
    RouteDescriptor,
    RouteHelperError,
    decorate_routes,
)

# Import plugins to trigger auto-registration (lazy to avoid cycles)
for _plugin in ("logging", "pydantic"):
    import_module(f"{__name__}.plugins.{_plugin}")
del _plugin

__all__ = [
    "DecoratedRoute",
    "InvalidTemplate",
    "MissingArgument",
    "PathHelpers",
    "Registry",
    "RouteDescriptor",
    "RouteHelperError",
    "decorate_routes",
]
