"""Path template parser (source of truth).

Rebuild this module from the rules below; nothing else is implied.

Segment kinds
-------------
Frozen, slotted dataclasses, each keeping the raw template token in ``raw``:

- ``Static(text)``: literal component emitted verbatim.
- ``Dynamic(name)``: value supplied by the caller at resolve time.
- ``CatchAll(name)``: glob component. ``name`` is the label without the
  marker (``"*path"`` → ``"path"``, ``"*"`` → ``""``).
- ``VersionPlaceholder()``: position of the API version.

Format suffix
-------------
Before splitting, a trailing format suffix is removed. Accepted spellings:
``(.:format)``, ``(/.:format)``, ``.:format``, ``(.json)``, ``(/.json)``.
A literal suffix (``json`` above) is reported as ``ParsedTemplate.format``;
the ``:format`` placeholder reports ``None``. Every spelling of the same
logical route yields the same segments.

Components
----------
The rest is split on ``/`` and empty components are dropped:

- ``:version`` / ``{version}`` → ``VersionPlaceholder``
- ``:name`` / ``{name}`` / ``{name:type}`` → ``Dynamic(name)``
- ``*name`` / ``*`` / ``{name:path}`` → ``CatchAll(name)``
- anything else → ``Static(text)``

An empty template (or ``/``) is the root path and yields no segments.

Errors
------
``InvalidTemplate`` for unterminated ``{``, stray ``}``, parentheses left
after removing the format suffix, markers without a name, dynamic names that
are not identifiers and ``*`` inside a component.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .errors import InvalidTemplate

__all__ = [
    "CatchAll",
    "Dynamic",
    "ParsedTemplate",
    "Segment",
    "Static",
    "VersionPlaceholder",
    "VERSION_SEGMENT",
    "dynamic_name",
    "parse_path",
    "parse_template",
]

VERSION_SEGMENT = "version"

_FORMAT_SUFFIX = re.compile(r"(?:\(/?\.(?P<paren>:format|\w+)\)|\.:format)$")
_NAME = re.compile(r"^[A-Za-z_]\w*$")


@dataclass(frozen=True, slots=True)
class Static:
    text: str

    @property
    def raw(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Dynamic:
    name: str
    raw: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.raw:
            object.__setattr__(self, "raw", f":{self.name}")


@dataclass(frozen=True, slots=True)
class CatchAll:
    name: str = ""
    raw: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.raw:
            object.__setattr__(self, "raw", f"*{self.name}")


@dataclass(frozen=True, slots=True)
class VersionPlaceholder:
    raw: str = field(default=":version", compare=False)


Segment = Union[Static, Dynamic, CatchAll, VersionPlaceholder]


@dataclass(frozen=True, slots=True)
class ParsedTemplate:
    """Segments of a template plus the extension fixed by its suffix."""

    template: str
    segments: Tuple[Segment, ...]
    format: Optional[str] = None


def dynamic_name(token: str) -> Optional[str]:
    """Return the parameter name of a ``:name``/``{name}`` token, else None."""
    if token.startswith(":") and len(token) > 1:
        return token[1:]
    if token.startswith("{") and token.endswith("}") and len(token) > 2:
        return token[1:-1].split(":", 1)[0]
    return None


def parse_template(template: str) -> ParsedTemplate:
    """Parse ``template`` into segments and the literal format suffix."""
    body, fmt = _strip_format(template)
    if "(" in body or ")" in body:
        raise InvalidTemplate(template, "optional groups are not supported")
    segments = tuple(_parse_component(template, part) for part in body.split("/") if part)
    return ParsedTemplate(template=template, segments=segments, format=fmt)


def parse_path(template: str) -> Tuple[Segment, ...]:
    """Parse ``template`` into its ordered segment sequence."""
    return parse_template(template).segments


def _strip_format(template: str) -> Tuple[str, Optional[str]]:
    match = _FORMAT_SUFFIX.search(template)
    if match is None:
        return template, None
    literal = match.group("paren")
    fmt = None if literal in (None, ":format") else literal
    return template[: match.start()], fmt


def _parse_component(template: str, part: str) -> Segment:
    if part.startswith("{") or part.endswith("}"):
        if not (part.startswith("{") and part.endswith("}")):
            raise InvalidTemplate(template, f"unterminated parameter {part!r}")
        inner = part[1:-1]
        if "{" in inner or "}" in inner:
            raise InvalidTemplate(template, f"nested braces in {part!r}")
        name, _, converter = inner.partition(":")
        _check_name(template, part, name)
        if converter == "path":
            return CatchAll(name=name, raw=part)
        if name == VERSION_SEGMENT:
            return VersionPlaceholder(raw=part)
        return Dynamic(name=name, raw=part)
    if "{" in part or "}" in part:
        raise InvalidTemplate(template, f"misplaced brace in {part!r}")
    if part.startswith("*"):
        name = part[1:]
        if name and not _NAME.match(name):
            raise InvalidTemplate(template, f"illegal glob name in {part!r}")
        return CatchAll(name=name, raw=part)
    if "*" in part:
        raise InvalidTemplate(template, f"glob marker inside {part!r}")
    if part.startswith(":"):
        name = part[1:]
        _check_name(template, part, name)
        if name == VERSION_SEGMENT:
            return VersionPlaceholder(raw=part)
        return Dynamic(name=name, raw=part)
    return Static(text=part)


def _check_name(template: str, part: str, name: str) -> None:
    if not name:
        raise InvalidTemplate(template, f"parameter without a name in {part!r}")
    if not _NAME.match(name):
        raise InvalidTemplate(template, f"illegal parameter name {name!r}")
