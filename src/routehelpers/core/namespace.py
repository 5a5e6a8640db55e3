"""PathHelpers mixin (source of truth).

Owners that want their path helpers as plain attributes mix in
``PathHelpers``; any registry created with the owner announces itself through
``_register_registry``.

- ``__slots__`` holds only the registry list, so slotted owners keep working.
- ``_register_registry(registry)`` appends the registry once.
- Attribute lookup falls back to the registered registries, in registration
  order, for names ending in ``_path`` (``api.api_v1_cats_path(id=1)``).
  Helpers are fetched through ``registry.get`` so plugin wrapping applies.
- ``path_helper_names()`` lists every reachable helper name, first registry
  wins on duplicates.
- ``path_registry(name)`` returns a registered registry by its name or raises
  ``AttributeError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, List, Tuple

from .naming import HELPER_SUFFIX

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .base_registry import BaseRegistry

__all__ = ["PathHelpers", "REGISTRY_LIST_ATTR_NAME"]

REGISTRY_LIST_ATTR_NAME = "__routehelpers_registries__"


class PathHelpers:
    """Mixin exposing registered path helpers as attributes."""

    __slots__ = (REGISTRY_LIST_ATTR_NAME,)

    def _register_registry(self, registry: "BaseRegistry") -> None:
        registries = self._registries()
        if registries is None:
            registries = []
            object.__setattr__(self, REGISTRY_LIST_ATTR_NAME, registries)
        if not any(existing is registry for existing in registries):
            registries.append(registry)

    def _registries(self) -> Any:
        try:
            return object.__getattribute__(self, REGISTRY_LIST_ATTR_NAME)
        except AttributeError:
            return None

    def _iter_registries(self) -> Iterator["BaseRegistry"]:
        yield from self._registries() or ()

    def __getattr__(self, name: str) -> Any:
        if name.endswith(HELPER_SUFFIX):
            for registry in self._iter_registries():
                if name in registry:
                    return registry.get(name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def path_helper_names(self) -> Tuple[str, ...]:
        names: List[str] = []
        for registry in self._iter_registries():
            for helper_name in registry.entries():
                if helper_name not in names:
                    names.append(helper_name)
        return tuple(names)

    def path_registry(self, name: str) -> "BaseRegistry":
        for registry in self._iter_registries():
            if registry.name == name:
                return registry
        raise AttributeError(f"No registry named '{name}' on {type(self).__name__}")
