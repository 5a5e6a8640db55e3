"""Path resolver (source of truth).

Rebuild this module from the description below.

Options
-------
``normalize_options(options=None, **kwargs)`` merges a positional mapping and
keyword arguments (keywords win) into a plain ``dict`` keyed by strings.
Keys are normalized once with ``normalize_key``: enum members become their
string value (or their name for non-string values), ``bytes`` are decoded and
anything else goes through ``str()``. ``format`` and ``params`` are reserved
keys; absent means ``None``.

Resolution
----------
``resolve_path(segments, version, options, *, default_format, helper_name)``
walks the segments in order:

- ``Static`` → its text
- ``VersionPlaceholder`` → ``version`` (nothing for unversioned routes)
- ``Dynamic`` → ``str(value)``; a missing, ``None`` or empty value raises
  ``MissingArgument``
- ``CatchAll`` → nothing

The pieces are joined with ``/`` after a leading ``/``. The extension is the
explicit ``format`` option when given, otherwise ``default_format`` unless the
last segment is a catch-all. Either form (``"xml"``/``".xml"``) renders as
``.xml``. A ``params`` mapping becomes ``?`` plus its url-encoded pairs in
insertion order (nested mappings as ``key[sub]``, sequences as ``key[]``); an
empty mapping adds nothing; any other value is appended after ``?`` with
``str()``.

The resolver is a pure function of its inputs.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlencode

from .errors import MissingArgument
from .segments import CatchAll, Dynamic, Segment, Static, VersionPlaceholder

__all__ = [
    "DEFAULT_FORMAT",
    "format_extension",
    "normalize_key",
    "normalize_options",
    "path_segments_with_values",
    "resolve_path",
    "to_query",
]

DEFAULT_FORMAT = "json"


def normalize_key(key: Any) -> str:
    if isinstance(key, Enum):
        return key.value if isinstance(key.value, str) else key.name
    if isinstance(key, bytes):
        return key.decode()
    return str(key)


def normalize_options(options: Optional[Mapping[Any, Any]] = None, /, **kwargs: Any) -> Dict[str, Any]:
    """Merge ``options`` and ``kwargs`` into a dict with string keys."""
    if options is not None and not isinstance(options, Mapping):
        raise TypeError(f"Helper options must be a mapping, got {type(options).__name__}")
    merged: Dict[str, Any] = {}
    for source in (options or {}, kwargs):
        for key, value in source.items():
            merged[normalize_key(key)] = value
    return merged


def format_extension(fmt: Any) -> str:
    if fmt is None:
        return ""
    fmt = str(fmt).strip().lstrip(".")
    return f".{fmt}" if fmt else ""


def resolve_path(
    segments: Sequence[Segment],
    version: Optional[str] = None,
    options: Optional[Mapping[Any, Any]] = None,
    *,
    default_format: Optional[str] = DEFAULT_FORMAT,
    helper_name: Optional[str] = None,
) -> str:
    """Build the concrete path for ``segments`` from ``options``.

    Raises:
        MissingArgument: when a dynamic segment has no usable value.
    """
    values = normalize_options(options)
    pieces: List[str] = []
    for segment in segments:
        if isinstance(segment, Static):
            pieces.append(segment.text)
        elif isinstance(segment, VersionPlaceholder):
            if version:
                pieces.append(version)
        elif isinstance(segment, Dynamic):
            value = values.get(segment.name)
            if value is None or (isinstance(value, str) and not value):
                raise MissingArgument(segment.name, helper_name)
            pieces.append(str(value))
    path = "/" + "/".join(pieces)

    fmt = values.get("format")
    if fmt is not None:
        path += format_extension(fmt)
    elif not (segments and isinstance(segments[-1], CatchAll)):
        path += format_extension(default_format)

    params = values.get("params")
    if params is None:
        return path
    if isinstance(params, Mapping):
        query = to_query(params)
        return f"{path}?{query}" if query else path
    return f"{path}?{params}"


def to_query(params: Mapping[Any, Any]) -> str:
    """Encode ``params`` as a query string, keeping insertion order."""
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        _flatten(normalize_key(key), value, pairs)
    return urlencode(pairs)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{normalize_key(key)}]", item, pairs)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            _flatten(f"{prefix}[]", item, pairs)
    else:
        pairs.append((prefix, _query_value(value)))


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def path_segments_with_values(
    segments: Sequence[Segment],
    version: Optional[str] = None,
    options: Optional[Mapping[Any, Any]] = None,
) -> List[Any]:
    """Return the non-blank value of each segment, without coercion.

    Dynamic segments without a value are skipped instead of raising.
    """
    values = normalize_options(options)
    result: List[Any] = []
    for segment in segments:
        if isinstance(segment, Static):
            result.append(segment.text)
        elif isinstance(segment, VersionPlaceholder):
            if version:
                result.append(version)
        elif isinstance(segment, Dynamic):
            value = values.get(segment.name)
            if value is not None and not (isinstance(value, str) and not value):
                result.append(value)
    return result
