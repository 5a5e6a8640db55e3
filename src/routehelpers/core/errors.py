"""Exceptions raised while decorating routes and building paths."""

from __future__ import annotations

from typing import Optional

__all__ = ["RouteHelperError", "MissingArgument", "InvalidTemplate"]


class RouteHelperError(Exception):
    """Base class for routehelpers errors."""


class MissingArgument(RouteHelperError, LookupError):
    """A dynamic segment had no value in the helper options."""

    def __init__(self, argument: str, helper_name: Optional[str] = None) -> None:
        self.argument = argument
        self.helper_name = helper_name
        where = f" for {helper_name}" if helper_name else ""
        super().__init__(f"Missing argument '{argument}'{where}")


class InvalidTemplate(RouteHelperError, ValueError):
    """A route path template could not be parsed."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid path template {template!r}: {reason}")
