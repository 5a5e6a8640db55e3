"""Plugin contract definitions used by the Registry runtime.

Source of truth
---------------
If this module were wiped except for this docstring, the implementation must be
reconstructed exactly as described below.

Objects
~~~~~~~
``HelperEntry``
    Dataclass capturing a path helper at registration time. Fields:

    - ``name`` – helper name
    - ``func`` – the bound helper built by ``DecoratedRoute``
    - ``registry`` – Registry instance that owns the helper
    - ``route`` – the ``DecoratedRoute`` the helper comes from
    - ``version`` – API version bound into the helper (``None`` if unversioned)
    - ``plugins`` – list of plugin names applied to the helper (order matters)
    - ``metadata`` – mutable dict used by plugins to store annotations

``BasePlugin``
    Base class every plugin subclasses. Responsibilities:

    - offer config helpers that delegate to the owning registry's
      ``_plugin_info`` store (no hidden per-plugin globals)
    - provide optional hooks ``on_decore(registry, route, entry)`` and
      ``wrap_handler(registry, entry, call_next)`` used by the pipeline

    Required class attributes: ``plugin_code`` (registration key) and
    ``plugin_description``.

    Constructor: ``BasePlugin(registry, **config)``; ``config`` goes through
    ``configure()``.

    ``configure(**config)``
        Subclasses declare accepted options through the method signature.
        ``__init_subclass__`` wraps it to:

        - parse ``flags`` (``"enabled,before:off"``) into booleans
        - honour ``_target``: ``"--base--"`` (registry level, default), a
          helper name, or ``"h1,h2"`` for several helpers
        - validate keyword arguments with pydantic ``validate_call``
        - write the validated config to the store

    ``configuration(helper_name=None)``
        merged config: registry level plus optional per-helper override.

    ``allow_entry(registry, entry, **filters)``
        optional veto used by ``members()``; ``False`` hides the helper.

    ``entry_metadata(registry, entry)``
        extra introspection data for ``members()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pydantic import validate_call

__all__ = ["BasePlugin", "HelperEntry"]


@dataclass
class HelperEntry:
    """Metadata for a registered path helper."""

    name: str
    func: Callable
    registry: Any
    route: Any
    version: Optional[str] = None
    plugins: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


def _wrap_configure(original_configure: Callable) -> Callable:
    """Wrap a plugin's configure() to handle flags, _target, validation and storage."""
    validated = validate_call(original_configure)

    def wrapper(
        self: "BasePlugin", *, _target: str = "--base--", flags: Optional[str] = None, **kwargs: Any
    ) -> None:
        if flags:
            kwargs.update(self._parse_flags(flags))

        if "," in _target:
            for target in [t.strip() for t in _target.split(",") if t.strip()]:
                wrapper(self, _target=target, **kwargs)
            return

        validated(self, **kwargs)
        self._write_config(_target, kwargs)

    wrapper.__doc__ = original_configure.__doc__
    return wrapper


class BasePlugin:
    """Hook interface + configuration helpers for registry plugins."""

    __slots__ = ("name", "_registry")

    plugin_code: str = ""
    plugin_description: str = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "configure" in cls.__dict__:
            cls.configure = _wrap_configure(cls.__dict__["configure"])

    def __init__(self, registry: Any, **config: Any):
        self.name = self.plugin_code
        self._registry = registry
        self._init_store()
        self.configure(**config)

    def _init_store(self) -> None:
        store = self._get_store()
        store.setdefault(self.name, {}).setdefault(
            "--base--", {"config": {"enabled": True}, "locals": {}}
        )

    def configure(self, *, _target: str = "--base--", flags: Optional[str] = None) -> None:
        """Accept only ``flags``; subclasses declare their own options."""
        if flags:
            self._write_config(_target, self._parse_flags(flags))

    def _write_config(self, target: str, config: Dict[str, Any]) -> None:
        if not config:
            return
        plugin_bucket = self._get_store().setdefault(self.name, {})
        bucket = plugin_bucket.setdefault(target, {"config": {}, "locals": {}})
        bucket["config"].update(config)

    def configuration(self, helper_name: Optional[str] = None) -> Dict[str, Any]:
        """Read merged configuration (base + optional per-helper override)."""
        plugin_bucket = self._get_store().get(self.name)
        if not plugin_bucket:
            return {}
        merged = dict(plugin_bucket.get("--base--", {}).get("config", {}))
        if helper_name:
            merged.update(plugin_bucket.get(helper_name, {}).get("config", {}))
        return merged

    def _parse_flags(self, flags: str) -> Dict[str, bool]:
        mapping: Dict[str, bool] = {}
        for chunk in flags.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            if ":" in chunk:
                name, value = chunk.split(":", 1)
                mapping[name.strip()] = value.strip().lower() != "off"
            else:
                mapping[chunk] = True
        return mapping

    def on_decore(self, registry: Any, route: Any, entry: HelperEntry) -> None:
        """Hook run when the helper is registered."""

    def wrap_handler(self, registry: Any, entry: HelperEntry, call_next: Callable) -> Callable:
        """Wrap helper invocation; default passthrough."""
        return call_next

    def allow_entry(self, registry: Any, entry: HelperEntry, **filters: Any) -> Optional[bool]:
        return None

    def entry_metadata(self, registry: Any, entry: HelperEntry) -> Dict[str, Any]:
        return {}

    def _get_store(self) -> Dict[str, Any]:
        return getattr(self._registry, "_plugin_info")
