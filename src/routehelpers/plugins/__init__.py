"""Bundled registry plugins.

``routehelpers.plugins.logging`` and ``routehelpers.plugins.pydantic`` call
``Registry.register_plugin`` when imported; ``routehelpers`` imports both, so
``registry.plug("logging")`` works right after ``import routehelpers``.
Importing this package alone registers nothing.
"""

__all__: list[str] = []
