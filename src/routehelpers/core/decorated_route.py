"""Decorated route façade (source of truth).

``DecoratedRoute(route)`` wraps one route descriptor and compiles it once:

- ``route`` is coerced into a ``RouteDescriptor`` (mappings and attribute
  bearing route objects are accepted).
- The path template is parsed eagerly; an ``InvalidTemplate`` surfaces from
  the constructor, never from a helper call.
- ``helper_names`` is computed at construction (one per version, or the
  custom name alone) and never changes.
- One bound helper is built per name. Each helper closes over the parsed
  segments and the version that name belongs to, and delegates to
  ``resolve_path``. The custom name, when declared, binds the first version.

Helpers accept ``(options=None, /, **kwargs)``; both sources are merged with
keyword arguments winning. They are exposed through ``path_helpers`` (a
read-only mapping), ``helper(name)`` and plain attribute access
(``route.api_v1_cats_path(id=1)``).

Introspection:

- ``helper_arguments``: dynamic names in template order, without the version
  placeholder and catch-alls.
- ``segment_to_value(token, options=None)``: the version for the version
  token (a ``version`` option picks another one), the option value for a
  dynamic token when supplied, otherwise the token itself.
- ``path_segments_with_values(options=None, version=None)``.

``decorate_routes(routes)`` decorates a whole route table in order.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .descriptor import RouteDescriptor
from .naming import derive_helper_names, path_helper_name
from .resolver import normalize_options, path_segments_with_values, resolve_path
from .segments import (
    VERSION_SEGMENT,
    Dynamic,
    Segment,
    dynamic_name,
    parse_template,
)

__all__ = ["DecoratedRoute", "decorate_routes"]


class DecoratedRoute:
    """One route compiled into its path helpers."""

    __slots__ = ("route", "segments", "format", "helper_names", "_helpers", "_versions_by_name")

    def __init__(self, route: Any) -> None:
        descriptor = RouteDescriptor.coerce(route)
        parsed = parse_template(descriptor.path)
        self.route = descriptor
        self.segments: Tuple[Segment, ...] = parsed.segments
        self.format: Optional[str] = parsed.format or descriptor.format
        self.helper_names: Tuple[str, ...] = derive_helper_names(
            self.segments, descriptor.versions, custom_name=descriptor.as_name
        )
        versions_by_name: Dict[str, Optional[str]] = {}
        if descriptor.as_name:
            versions_by_name[self.helper_names[0]] = self.version
        else:
            for version in descriptor.versions or (None,):
                versions_by_name.setdefault(path_helper_name(self.segments, version), version)
        self._versions_by_name = versions_by_name
        self._helpers: Dict[str, Callable[..., str]] = {
            name: self._build_helper(name, version) for name, version in versions_by_name.items()
        }

    def __repr__(self) -> str:
        return f"DecoratedRoute({self.verb} {self.path!r}, helpers={list(self.helper_names)})"

    def __getattr__(self, name: str) -> Callable[..., str]:
        # Only reached for names that are not slots or methods.
        try:
            return object.__getattribute__(self, "_helpers")[name]
        except (AttributeError, KeyError):
            raise AttributeError(
                f"{type(self).__name__} has no path helper named '{name}'"
            ) from None

    # ------------------------------------------------------------------
    # Descriptor passthrough
    # ------------------------------------------------------------------
    @property
    def path(self) -> str:
        return self.route.path

    @property
    def namespace(self) -> str:
        return self.route.namespace

    @property
    def verb(self) -> str:
        return self.route.verb

    @property
    def versions(self) -> Tuple[str, ...]:
        return self.route.versions

    @property
    def version(self) -> Optional[str]:
        """First declared version, or None for unversioned routes."""
        return self.route.versions[0] if self.route.versions else None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def path_helpers(self) -> Mapping[str, Callable[..., str]]:
        return MappingProxyType(self._helpers)

    def helper(self, name: str) -> Callable[..., str]:
        """Return the bound helper called ``name``."""
        try:
            return self._helpers[name]
        except KeyError:
            raise KeyError(f"No path helper '{name}' on route {self.path!r}") from None

    def helper_version(self, name: str) -> Optional[str]:
        return self._versions_by_name[name]

    def path_helper_name(self, version: Optional[str] = None) -> str:
        """Return the helper name for ``version`` (default: the first version)."""
        if version is None:
            version = self.version
        return path_helper_name(self.segments, version, custom_name=self.route.as_name)

    @property
    def helper_arguments(self) -> List[str]:
        """Names the caller must supply, in template order."""
        names: List[str] = []
        for segment in self.segments:
            if isinstance(segment, Dynamic) and segment.name not in names:
                names.append(segment.name)
        return names

    def _build_helper(self, name: str, version: Optional[str]) -> Callable[..., str]:
        def helper(options: Optional[Mapping[Any, Any]] = None, /, **kwargs: Any) -> str:
            return resolve_path(
                self.segments,
                version,
                normalize_options(options, **kwargs),
                default_format=self.format,
                helper_name=name,
            )

        helper.__name__ = name
        helper.__qualname__ = f"{type(self).__name__}.{name}"
        helper.__doc__ = f"Build the path of {self.verb} {self.path}."
        return helper

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def segment_to_value(self, segment: str, options: Optional[Mapping[Any, Any]] = None) -> Any:
        """Return the value a raw template token stands for."""
        values = normalize_options(options)
        name = dynamic_name(segment)
        if name is None:
            return segment
        if name == VERSION_SEGMENT:
            return values.get(VERSION_SEGMENT) or self.version
        if name in values:
            return values[name]
        return segment

    def path_segments_with_values(
        self, options: Optional[Mapping[Any, Any]] = None, version: Optional[str] = None
    ) -> List[Any]:
        return path_segments_with_values(
            self.segments, version if version is not None else self.version, options
        )

    def helper_items(self) -> Tuple[Tuple[str, Callable[..., str]], ...]:
        """Return the (helper name, callable) pairs of this route."""
        return tuple(self._helpers.items())


def decorate_routes(routes: Iterable[Any]) -> List[DecoratedRoute]:
    """Decorate every route of a route table, keeping its order."""
    return [route if isinstance(route, DecoratedRoute) else DecoratedRoute(route) for route in routes]
