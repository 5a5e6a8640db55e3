"""Logging plugin (source of truth).

Rebuild behaviour exactly as described; no hidden defaults beyond this text.

Responsibilities
----------------
- Wrap each helper call and emit configurable messages:
  * ``before`` (default True): ``"{entry.name} start"``
  * ``after`` (default True): ``"{entry.name} -> {path} ({ms:.2f} ms)"`` with
    the built path and the elapsed time in milliseconds.
- Sinks:
  * when ``print`` is true → always ``print(message)``;
  * else when ``log`` is true → ``logger.info(message)`` if the logger reports
    handlers via ``hasHandlers()``, otherwise ``print(message)`` to avoid drops;
  * else → no output.
- ``enabled`` gates the plugin entirely (default True).
- Use a provided ``logging.Logger`` (default ``logging.getLogger("routehelpers")``).

Configuration
-------------
Accepted keys (registry-level or per-helper): ``enabled``, ``before``,
``after``, ``log``, ``print``; as kwargs to ``plug``/``configure``, as
``flags`` strings (``"before:off,print"``) or as ``logging_<key>`` options of
``add_route``.

Exceptions propagate (``MissingArgument`` included); the end message is
skipped when the helper raises.

Registration
------------
At import the plugin registers itself as ``"logging"``.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from routehelpers.core.registry import Registry
from routehelpers.plugins._base_plugin import BasePlugin, HelperEntry

_DEFAULTS = {"enabled": True, "before": True, "after": True, "log": True, "print": False}


class LoggingPlugin(BasePlugin):
    """Logs helper calls with the built path and timing."""

    plugin_code = "logging"
    plugin_description = "Logs path helper calls with timing"

    __slots__ = ("_logger",)

    def __init__(self, registry, *, logger: Optional[logging.Logger] = None, **cfg):
        self._logger = logger or logging.getLogger("routehelpers")
        super().__init__(registry, **cfg)

    def configure(
        self,
        enabled: bool = True,
        before: bool = True,
        after: bool = True,
        log: bool = True,
        print: bool = False,  # noqa: A002 - mirrors the option name
    ):
        """Configure logging plugin options.

        The wrapper added by __init_subclass__ handles writing to store.
        """

    def _emit(self, message: str, *, cfg: dict) -> None:
        if cfg["print"]:
            print(message)
            return
        if cfg["log"]:
            logger = self._logger
            has_handlers = getattr(logger, "hasHandlers", None) or getattr(
                logger, "has_handlers", None
            )
            if callable(has_handlers) and has_handlers():
                logger.info(message)
            else:
                print(message)

    def wrap_handler(self, registry, entry: HelperEntry, call_next: Callable):
        """Wrap helper with start/end logging and timing."""

        def logged(*args, **kwargs):
            cfg = self._effective_config(entry.name)
            if not cfg["enabled"]:
                return call_next(*args, **kwargs)
            if cfg["before"]:
                self._emit(f"{entry.name} start", cfg=cfg)
            t0 = time.perf_counter()
            path = call_next(*args, **kwargs)
            elapsed = (time.perf_counter() - t0) * 1000
            if cfg["after"]:
                self._emit(f"{entry.name} -> {path} ({elapsed:.2f} ms)", cfg=cfg)
            return path

        return logged

    def _effective_config(self, helper_name: str) -> dict:
        cfg = _DEFAULTS | self.configuration(helper_name)
        return {key: default if cfg.get(key) is None else bool(cfg[key]) for key, default in _DEFAULTS.items()}


Registry.register_plugin(LoggingPlugin)
