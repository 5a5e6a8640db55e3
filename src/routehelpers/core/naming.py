"""Helper name derivation.

``sanitize_method_name`` turns any string into a legal identifier: characters
outside ``[A-Za-z0-9_]`` become ``_`` and so does a leading digit. It is pure
and idempotent.

``path_helper_name`` builds the name for one version by joining the words of
the template in order: static text, the version in place of the version
placeholder and the label of a catch-all (never its glob marker). Dynamic
segments contribute nothing. No words at all means ``root_path``.

``derive_helper_names`` returns one name per version, or exactly the custom
name when the route declares one. Names are not deduplicated across routes;
collisions are the registry's business.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence, Tuple

from .segments import CatchAll, Segment, Static, VersionPlaceholder

__all__ = ["HELPER_SUFFIX", "ROOT_NAME", "sanitize_method_name", "path_helper_name", "derive_helper_names"]

HELPER_SUFFIX = "_path"
ROOT_NAME = "root"

_ILLEGAL = re.compile(r"\W|^[0-9]", re.ASCII)


def sanitize_method_name(raw: str) -> str:
    """Return ``raw`` with every illegal identifier character replaced by ``_``."""
    return _ILLEGAL.sub("_", raw)


def name_words(segments: Iterable[Segment], version: Optional[str] = None) -> list[str]:
    words: list[str] = []
    for segment in segments:
        if isinstance(segment, Static):
            word = segment.text
        elif isinstance(segment, VersionPlaceholder):
            word = version or ""
        elif isinstance(segment, CatchAll):
            word = segment.name
        else:
            continue
        if word.strip():
            words.append(word)
    return words


def path_helper_name(
    segments: Sequence[Segment],
    version: Optional[str] = None,
    *,
    custom_name: Optional[str] = None,
) -> str:
    """Return the helper name of a route for a single ``version``."""
    if custom_name:
        name = custom_name
    else:
        name = "_".join(name_words(segments, version)) or ROOT_NAME
    return sanitize_method_name(name) + HELPER_SUFFIX


def derive_helper_names(
    segments: Sequence[Segment],
    versions: Sequence[Optional[str]],
    *,
    custom_name: Optional[str] = None,
) -> Tuple[str, ...]:
    """Return the helper names of a route, one per version.

    Args:
        segments: Parsed template of the route.
        versions: Versions the route answers to; empty for unversioned routes.
        custom_name: Declared helper name; overrides versioned names entirely.
    """
    if custom_name:
        return (path_helper_name(segments, custom_name=custom_name),)
    names: list[str] = []
    for version in versions or (None,):
        name = path_helper_name(segments, version)
        if name not in names:
            names.append(name)
    return tuple(names)
