"""Route descriptor model (input boundary).

Host routing frameworks describe their routes in different shapes: some
return a single version string, some a list, some a stringified list such as
``'["alpha", "beta"]'``. ``RouteDescriptor`` accepts all of them, from a
mapping or from any object exposing the same attributes, and normalizes the
versions to an ordered tuple once so nothing downstream has to care.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

__all__ = ["RouteDescriptor"]

_VERSION_TOKEN = re.compile(r"[^\[\",\]'\s]+")


class RouteDescriptor(BaseModel):
    """Read-only description of one declared endpoint.

    Attributes:
        path: Path template, e.g. ``"/api/:version/cats/:id(.json)"``.
        versions: Versions the route answers to, in declaration order.
        namespace: Namespace grouping the route was declared under.
        as_name: Custom helper name declared for the route.
        verb: HTTP verb.
        format: Format the API declares; default extension of its helpers.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True, extra="ignore")

    path: str = Field(validation_alias=AliasChoices("path", "route_path"))
    versions: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("versions", "version", "route_version"),
    )
    namespace: str = Field(
        default="/", validation_alias=AliasChoices("namespace", "route_namespace")
    )
    as_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("as_name", "as", "helper_name", "name"),
    )
    verb: str = Field(
        default="GET", validation_alias=AliasChoices("verb", "method", "request_method")
    )
    format: Optional[str] = "json"

    @field_validator("versions", mode="before")
    @classmethod
    def _split_versions(cls, value: Any) -> Tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            tokens = _VERSION_TOKEN.findall(value)
        elif isinstance(value, (list, tuple, set, frozenset)):
            tokens = [str(item).strip() for item in value if item is not None]
        else:
            raise ValueError("versions must be a string or a sequence of strings")
        ordered: list[str] = []
        for token in tokens:
            if token and token not in ordered:
                ordered.append(token)
        return tuple(ordered)

    @field_validator("as_name", mode="before")
    @classmethod
    def _blank_name(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("verb", mode="before")
    @classmethod
    def _upper_verb(cls, value: Any) -> str:
        return str(value or "GET").strip().upper()

    @field_validator("format", mode="before")
    @classmethod
    def _strip_dot(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip().lstrip(".")
        return value or None

    @classmethod
    def coerce(cls, value: Any) -> "RouteDescriptor":
        """Return ``value`` as a descriptor, validating it when needed."""
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)
