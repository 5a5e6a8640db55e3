"""Plugin-free helper registry (source of truth).

If this file vanished, rebuild it from this description. The module exposes
:class:`BaseRegistry`, which collects the path helpers of decorated routes
under their helper names, resolves them by name, installs them on a target
namespace and exposes introspection without any plugin logic. Subclasses add
middleware but must preserve these semantics.

Constructor and slots
---------------------
Constructor signature::

    BaseRegistry(owner=None, name=None, *, routes=None,
                 get_default_handler=None, get_kwargs=None, replace=False)

- ``owner`` is optional. When it exposes a callable ``_register_registry``
  hook (see ``PathHelpers``) the registry announces itself to it.
- Slots: ``owner``, ``name``, ``_routes`` (decorated routes in insertion
  order), ``_entries`` (helper name → HelperEntry), ``_handlers`` (helper name
  → callable), ``_get_defaults`` (SmartOptions defaults for ``get``).
- ``get_default_handler`` and ``get_kwargs`` become defaults merged via
  ``SmartOptions`` in ``get()``.
- ``routes`` are registered right away with ``add_routes(routes, replace=...)``.

Registration
------------
``add_route(route, *, replace=False, **metadata)``

- ``route`` is a ``DecoratedRoute`` or anything ``DecoratedRoute`` accepts
  (descriptor, mapping, route object); it is decorated when needed, so an
  ``InvalidTemplate`` surfaces here.
- Each ``(helper_name, callable)`` pair of the route becomes a
  ``HelperEntry`` carrying the route, its bound version and a copy of
  ``metadata`` plus ``metadata["verbs"]``.
- A name already registered for the same path shape (equal segments, format
  and version, e.g. ``GET`` and ``POST /cats``) is shared: the first helper
  is kept and the new verb appended to ``metadata["verbs"]``. Any other
  reuse of a name raises ``ValueError("Helper name collision: ...")`` unless
  ``replace`` is true, in which case the newer helper wins. Names are checked
  before anything is stored, so a collision leaves the registry unchanged.
- ``_after_entry_registered`` runs for each entry, then handlers are rebuilt.

``add_routes(routes, *, replace=False, **metadata)`` registers each route in
order and returns ``self``.

Lookup and execution
--------------------
- ``get(name, **options)`` merges ``options`` over ``_get_defaults`` with
  ``SmartOptions``; unknown names fall back to ``default_handler`` when given,
  else raise ``NotImplementedError``. ``__getitem__`` aliases ``get``.
- ``call(name, *args, **kwargs)`` fetches then invokes.
- ``entries()`` returns helper names; ``routes()`` the decorated routes.
- ``install(target, *, replace=False)`` binds every handler on ``target``
  with ``setattr``. Existing attributes that are not helpers installed by this
  registry raise ``ValueError`` unless ``replace``. Returns ``target``.

Introspection
-------------
``members(verb=None, version=None)`` returns ``{"name", "registry",
"entries"}`` where entries map helper name → info dict (name, callable, verbs,
path, version, arguments, metadata). Empty registries return ``{}``.
Filters are normalized by ``_prepare_filter_args`` and checked by
``_allow_entry``.

Hooks for subclasses
--------------------
``_wrap_handler``, ``_after_entry_registered``, ``_describe_entry_extra``,
``_prepare_filter_args``, ``_allow_entry``. Defaults are passthrough.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from smartseeds import SmartOptions
from smartseeds.typeutils import safe_is_instance

from routehelpers.core.decorated_route import DecoratedRoute
from routehelpers.plugins._base_plugin import HelperEntry

__all__ = ["BaseRegistry", "INSTALLED_ATTR_NAME"]

INSTALLED_ATTR_NAME = "__routehelpers_registry__"


class BaseRegistry:
    """Plugin-free table of path helpers.

    Responsibilities:
    - register the helpers of decorated routes under their helper names
    - resolve helpers by name, with an optional fallback
    - install helpers on a namespace object
    - expose introspection data and hooks for subclasses
    """

    __slots__ = ("owner", "name", "_routes", "_entries", "_handlers", "_get_defaults")

    def __init__(
        self,
        owner: Any = None,
        name: Optional[str] = None,
        *,
        routes: Optional[Iterable[Any]] = None,
        get_default_handler: Optional[Callable] = None,
        get_kwargs: Optional[Dict[str, Any]] = None,
        replace: bool = False,
    ) -> None:
        self.owner = owner
        self.name = name
        self._routes: List[DecoratedRoute] = []
        self._entries: Dict[str, HelperEntry] = {}
        self._handlers: Dict[str, Callable] = {}
        defaults: Dict[str, Any] = dict(get_kwargs or {})
        if get_default_handler is not None:
            defaults.setdefault("default_handler", get_default_handler)
        self._get_defaults: Dict[str, Any] = defaults
        self._register_with_owner()
        if routes is not None:
            self.add_routes(routes, replace=replace)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, helpers={len(self._entries)})"

    def __contains__(self, helper_name: object) -> bool:
        return helper_name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    # ------------------------------------------------------------------
    # Registration helpers
    # ------------------------------------------------------------------
    def _register_with_owner(self) -> None:
        hook = getattr(self.owner, "_register_registry", None)
        if callable(hook):
            hook(self)

    def add_route(self, route: Any, *, replace: bool = False, **metadata: Any) -> "BaseRegistry":
        """Register every helper of ``route``.

        Args:
            route: DecoratedRoute, RouteDescriptor, mapping or route object.
            replace: Allow overwriting helpers already registered.
            metadata: Extra metadata stored on each HelperEntry.

        Returns:
            self (to allow chaining).

        Raises:
            ValueError: on helper name collision when replace is False.
            InvalidTemplate: when the route's template cannot be parsed.
        """
        if not safe_is_instance(route, "routehelpers.core.decorated_route.DecoratedRoute"):
            route = DecoratedRoute(route)
        pairs = route.helper_items()
        shared: List[str] = []
        for helper_name, _ in pairs:
            existing = self._entries.get(helper_name)
            if existing is None:
                continue
            if self._same_path(existing, route, helper_name):
                shared.append(helper_name)
            elif not replace:
                raise ValueError(
                    f"Helper name collision: {helper_name} "
                    f"({existing.route.verb} {existing.route.path!r} vs {route.verb} {route.path!r})"
                )
        self._routes.append(route)
        for helper_name, func in pairs:
            if helper_name in shared:
                verbs = self._entries[helper_name].metadata.setdefault("verbs", [])
                if route.verb not in verbs:
                    verbs.append(route.verb)
                continue
            entry_meta = dict(metadata)
            entry_meta["verbs"] = [route.verb]
            entry = HelperEntry(
                name=helper_name,
                func=func,
                registry=self,
                route=route,
                version=route.helper_version(helper_name),
                metadata=entry_meta,
            )
            self._entries[helper_name] = entry
            self._after_entry_registered(entry)
        self._rebuild_handlers()
        return self

    @staticmethod
    def _same_path(existing: HelperEntry, route: DecoratedRoute, helper_name: str) -> bool:
        # Same helper name for the same path shape (e.g. GET and POST /cats).
        return (
            existing.route.segments == route.segments
            and existing.route.format == route.format
            and existing.version == route.helper_version(helper_name)
        )

    def add_routes(
        self, routes: Iterable[Any], *, replace: bool = False, **metadata: Any
    ) -> "BaseRegistry":
        """Register a whole route table, in order."""
        for route in routes:
            self.add_route(route, replace=replace, **metadata)
        return self

    def _wrap_handler(
        self, entry: HelperEntry, call_next: Callable
    ) -> Callable:  # pragma: no cover - overridden by plugin registries
        return call_next

    # ------------------------------------------------------------------
    # Handler execution
    # ------------------------------------------------------------------
    def _rebuild_handlers(self) -> None:
        handlers: Dict[str, Callable] = {}
        for helper_name, entry in self._entries.items():
            handlers[helper_name] = self._wrap_handler(entry, entry.func)
        self._handlers = handlers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get(self, name: str, **options: Any) -> Callable:
        """Return the helper registered as ``name``.

        Falls back to ``default_handler`` if provided, otherwise raises
        NotImplementedError.
        """
        opts = SmartOptions(options, defaults=self._get_defaults)
        default = getattr(opts, "default_handler", None)
        handler = self._handlers.get(name)
        if handler is None:
            handler = default
        if handler is None:
            raise NotImplementedError(f"Path helper '{name}' not found in registry '{self.name}'")
        return handler

    __getitem__ = get

    def call(self, name: str, *args: Any, **kwargs: Any) -> str:
        """Fetch and invoke a helper in one step."""
        return self.get(name)(*args, **kwargs)

    def entries(self) -> Tuple[str, ...]:
        """Return the registered helper names."""
        return tuple(self._handlers.keys())

    def routes(self) -> Tuple[DecoratedRoute, ...]:
        return tuple(self._routes)

    def install(self, target: Any, *, replace: bool = False) -> Any:
        """Bind every helper on ``target`` (module, class, namespace object)."""
        for helper_name, handler in self._handlers.items():
            current = getattr(target, helper_name, None)
            if (
                current is not None
                and getattr(current, INSTALLED_ATTR_NAME, None) is not self
                and not replace
            ):
                raise ValueError(
                    f"Cannot install '{helper_name}': attribute already exists on {target!r}"
                )
            installed = self._installable(helper_name, handler)
            if isinstance(target, type):
                installed = staticmethod(installed)
            setattr(target, helper_name, installed)
        return target

    def _installable(self, helper_name: str, handler: Callable) -> Callable:
        # Resolved on every call so plugins attached later still apply.
        def installed(*args: Any, **kwargs: Any) -> str:
            return self.get(helper_name)(*args, **kwargs)

        installed.__name__ = helper_name
        installed.__doc__ = getattr(handler, "__doc__", None)
        setattr(installed, INSTALLED_ATTR_NAME, self)
        return installed

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def members(self, **kwargs: Any) -> Dict[str, Any]:
        """Return the helpers and their metadata, respecting filters."""
        filter_args = self._prepare_filter_args(**kwargs)
        entries = {
            entry.name: self._entry_member_info(entry)
            for entry in self._entries.values()
            if self._allow_entry(entry, **filter_args)
        }
        if not entries:
            return {}
        return {"name": self.name, "registry": self, "entries": entries}

    def _entry_member_info(self, entry: HelperEntry) -> Dict[str, Any]:
        route = entry.route
        info: Dict[str, Any] = {
            "name": entry.name,
            "callable": self._handlers[entry.name],
            "verbs": list(entry.metadata.get("verbs", [route.verb])),
            "path": route.path,
            "version": entry.version,
            "arguments": route.helper_arguments,
            "metadata": entry.metadata,
        }
        extra = self._describe_entry_extra(entry, info)
        if extra:
            info.update(extra)
        return info

    # ------------------------------------------------------------------
    # Hooks (no-op for BaseRegistry)
    # ------------------------------------------------------------------
    def iter_plugins(self) -> List[Any]:  # pragma: no cover - base registry has no plugins
        return []

    def _after_entry_registered(
        self, entry: HelperEntry
    ) -> None:  # pragma: no cover - hook for subclasses
        return None

    def _describe_entry_extra(
        self, entry: HelperEntry, base_description: Dict[str, Any]
    ) -> Dict[str, Any]:  # pragma: no cover - overridden when plugins present
        return {}

    def _prepare_filter_args(self, **raw_filters: Any) -> Dict[str, Any]:
        filters: Dict[str, Any] = {}
        verb = raw_filters.get("verb")
        if verb:
            if not isinstance(verb, str):
                raise TypeError("verb must be a string")
            filters["verb"] = verb.strip().upper()
        version = raw_filters.get("version")
        if version:
            if not isinstance(version, str):
                raise TypeError("version must be a string")
            filters["version"] = version.strip()
        return filters

    def _allow_entry(self, entry: HelperEntry, **filters: Any) -> bool:
        verb = filters.get("verb")
        if verb and verb not in entry.metadata.get("verbs", [entry.route.verb]):
            return False
        version = filters.get("version")
        if version and entry.version != version:
            return False
        return True
