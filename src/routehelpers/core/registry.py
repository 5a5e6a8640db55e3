"""Registry with plugin pipeline (source of truth).

If this module disappeared, rebuild it exactly as described. ``Registry``
extends ``BaseRegistry`` with a global plugin registry, per-registry plugin
instances, middleware wrapping, and plugin state stored on the registry.

Internal state
--------------
- ``_plugin_specs``: list of ``_PluginSpec`` (factory, kwargs copy).
- ``_plugins``: instantiated plugins in the order they were attached.
- ``_plugins_by_name``: name → plugin instance.
- ``_plugin_info``: per-plugin state store, one ``"--base--"`` bucket for
  registry-level config plus one bucket per helper name, each with
  ``config`` and ``locals``.

Global registry
---------------
``Registry.register_plugin(plugin_class, name=None)`` requires a
``BasePlugin`` subclass (``TypeError`` otherwise) with a ``plugin_code``
(``ValueError`` otherwise). Without ``name`` a different class already
registered under the same code raises ``ValueError``; an explicit ``name``
overwrites. ``available_plugins`` returns a shallow copy.

Attaching plugins
-----------------
``plug(plugin_name, **config)`` looks the class up by name (``ValueError``
listing the available names if missing), instantiates it with ``config``,
applies ``on_decore`` to existing entries, rebuilds handlers and returns
``self``. Attached plugins are reachable as attributes
(``registry.logging``); unknown names raise ``AttributeError``.

Per-helper plugin options
-------------------------
``add_route(route, logging_before=False)``: metadata keys shaped
``<plugin>_<key>`` where ``<plugin>`` is a registered plugin code are moved to
``metadata["plugin_config"]`` and seeded into the helper's config bucket.

Wrapping pipeline
-----------------
``_wrap_handler(entry, call_next)`` builds layers from ``_plugins`` in reverse
order (first attached = outermost). Each layer is guarded so it is skipped
when ``is_plugin_enabled(helper, plugin)`` is False.

Filtering and description
-------------------------
``_allow_entry`` asks each plugin's ``allow_entry``; an explicit ``False``
hides the helper. ``_describe_entry_extra`` collects per-plugin config and
``entry_metadata`` under ``info["plugins"]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Type

from routehelpers.core.base_registry import BaseRegistry
from routehelpers.plugins._base_plugin import BasePlugin, HelperEntry

__all__ = ["Registry"]

_PLUGIN_REGISTRY: Dict[str, Type[BasePlugin]] = {}


@dataclass
class _PluginSpec:
    factory: Type[BasePlugin]
    kwargs: Dict[str, Any]

    def instantiate(self, registry: "Registry") -> BasePlugin:
        return self.factory(registry, **self.kwargs)


class Registry(BaseRegistry):
    """Helper registry with plugin registry/pipeline support."""

    __slots__ = BaseRegistry.__slots__ + (
        "_plugin_specs",
        "_plugins",
        "_plugins_by_name",
        "_plugin_info",
    )

    def __init__(self, *args: Any, **kwargs: Any):
        self._plugin_specs: List[_PluginSpec] = []
        self._plugins: List[BasePlugin] = []
        self._plugins_by_name: Dict[str, BasePlugin] = {}
        self._plugin_info: Dict[str, Dict[str, Any]] = {}
        super().__init__(*args, **kwargs)

    # ------------------------------------------------------------------
    # Plugin registration
    # ------------------------------------------------------------------
    @classmethod
    def register_plugin(cls, plugin_class: Type[BasePlugin], name: Optional[str] = None) -> None:
        """Register a plugin class globally.

        Args:
            plugin_class: A BasePlugin subclass with plugin_code defined.
            name: Optional override name; overwrites any existing registration.
        """
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, BasePlugin):
            raise TypeError("plugin_class must be a BasePlugin subclass")
        if not getattr(plugin_class, "plugin_code", None):
            raise ValueError(
                f"Plugin {plugin_class.__name__} not following standards: missing plugin_code"
            )
        code = name or plugin_class.plugin_code
        if name is None:
            existing = _PLUGIN_REGISTRY.get(code)
            if existing is not None and existing is not plugin_class:
                raise ValueError(f"Plugin '{code}' already registered")
        _PLUGIN_REGISTRY[code] = plugin_class

    @classmethod
    def available_plugins(cls) -> Dict[str, Type[BasePlugin]]:
        return dict(_PLUGIN_REGISTRY)

    def plug(self, plugin: str, **config: Any) -> "Registry":
        """Attach a plugin by name (previously registered globally)."""
        if not isinstance(plugin, str):
            raise TypeError(
                f"Plugin must be referenced by name string, got {type(plugin).__name__}"
            )
        plugin_class = _PLUGIN_REGISTRY.get(plugin)
        if plugin_class is None:
            available = ", ".join(sorted(_PLUGIN_REGISTRY)) or "none"
            raise ValueError(
                f"Unknown plugin '{plugin}'. Register it first. Available plugins: {available}"
            )
        spec = _PluginSpec(plugin_class, dict(config))
        self._plugin_specs.append(spec)
        instance = spec.instantiate(self)
        self._plugins.append(instance)
        self._plugins_by_name[instance.name] = instance
        self._apply_plugin_to_entries(instance)
        self._rebuild_handlers()
        return self

    def iter_plugins(self) -> List[BasePlugin]:  # type: ignore[override]
        """Return attached plugin instances in application order."""
        return list(self._plugins)

    def get_config(self, plugin_name: str, helper_name: Optional[str] = None) -> Dict[str, Any]:
        """Return plugin config (global + per-helper overrides) for an attached plugin."""
        plugin = self._plugins_by_name.get(plugin_name)
        if plugin is None:
            raise AttributeError(
                f"No plugin named '{plugin_name}' attached to registry '{self.name}'"
            )
        return plugin.configuration(helper_name)

    def __getattr__(self, name: str) -> Any:
        try:
            plugins = object.__getattribute__(self, "_plugins_by_name")
        except AttributeError:
            raise AttributeError(name) from None
        plugin = plugins.get(name)
        if plugin is None:
            raise AttributeError(f"No plugin named '{name}' attached to registry '{self.name}'")
        return plugin

    def _get_plugin_bucket(self, plugin_name: str) -> Dict[str, Any]:
        bucket = self._plugin_info.get(plugin_name)
        if bucket is None:
            raise AttributeError(
                f"No plugin named '{plugin_name}' attached to registry '{self.name}'"
            )
        bucket.setdefault("--base--", {"config": {}, "locals": {}})
        return bucket

    # ------------------------------------------------------------------
    # Runtime flags (stored on plugin_info)
    # ------------------------------------------------------------------
    def set_plugin_enabled(self, helper_name: str, plugin_name: str, enabled: bool = True) -> None:
        bucket = self._get_plugin_bucket(plugin_name)
        entry = bucket.setdefault(helper_name, {"config": {}, "locals": {}})
        entry.setdefault("locals", {})["enabled"] = bool(enabled)

    def is_plugin_enabled(self, helper_name: str, plugin_name: str) -> bool:
        bucket = self._get_plugin_bucket(plugin_name)
        entry_locals = bucket.get(helper_name, {}).get("locals", {})
        if "enabled" in entry_locals:
            return bool(entry_locals["enabled"])
        base_locals = bucket.get("--base--", {}).get("locals", {})
        return bool(base_locals.get("enabled", True))

    # ------------------------------------------------------------------
    # Overrides/hooks
    # ------------------------------------------------------------------
    def _wrap_handler(self, entry: HelperEntry, call_next: Callable) -> Callable:  # type: ignore[override]
        wrapped = call_next
        for plugin in reversed(self._plugins):
            plugin_call = plugin.wrap_handler(self, entry, wrapped)
            wrapped = self._create_wrapper(plugin, entry, plugin_call, wrapped)
        return wrapped

    def _create_wrapper(
        self,
        plugin: BasePlugin,
        entry: HelperEntry,
        plugin_call: Callable,
        next_handler: Callable,
    ) -> Callable:
        @wraps(next_handler)
        def wrapper(*args, **kwargs):
            if not self.is_plugin_enabled(entry.name, plugin.name):
                return next_handler(*args, **kwargs)
            return plugin_call(*args, **kwargs)

        return wrapper

    def _apply_plugin_to_entries(self, plugin: BasePlugin) -> None:
        for entry in self._entries.values():
            if plugin.name not in entry.plugins:
                entry.plugins.append(plugin.name)
            plugin.on_decore(self, entry.route, entry)

    def _after_entry_registered(self, entry: HelperEntry) -> None:  # type: ignore[override]
        plugin_options: Dict[str, Dict[str, Any]] = {}
        for key in list(entry.metadata):
            plugin_name, _, plugin_key = key.partition("_")
            if plugin_key and plugin_name in _PLUGIN_REGISTRY:
                plugin_options.setdefault(plugin_name, {})[plugin_key] = entry.metadata.pop(key)
        if plugin_options:
            entry.metadata["plugin_config"] = plugin_options
            for plugin_name, cfg in plugin_options.items():
                bucket = self._plugin_info.setdefault(
                    plugin_name, {"--base--": {"config": {}, "locals": {}}}
                )
                entry_bucket = bucket.setdefault(entry.name, {"config": {}, "locals": {}})
                entry_bucket["config"].update(cfg)
        for plugin in self._plugins:
            if plugin.name not in entry.plugins:
                entry.plugins.append(plugin.name)
            plugin.on_decore(self, entry.route, entry)

    def _allow_entry(self, entry: HelperEntry, **filters: Any) -> bool:
        if not super()._allow_entry(entry, **filters):
            return False
        for plugin in self._plugins:
            if plugin.allow_entry(self, entry, **filters) is False:
                return False
        return True

    def _describe_entry_extra(  # type: ignore[override]
        self, entry: HelperEntry, base_description: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Gather plugin config and metadata for a helper."""
        plugins_info: Dict[str, Dict[str, Any]] = {}
        for plugin in self._plugins:
            plugin_data: Dict[str, Any] = {}
            config = plugin.configuration(entry.name)
            if config:
                plugin_data["config"] = config
            meta = plugin.entry_metadata(self, entry)
            if meta:
                plugin_data["metadata"] = meta
            if plugin_data:
                plugins_info[plugin.name] = plugin_data
        if plugins_info:
            return {"plugins": plugins_info}
        return {}
