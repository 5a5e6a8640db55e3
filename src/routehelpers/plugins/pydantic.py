"""Pydantic validation plugin (source of truth).

Rebuild exactly from this contract; no hidden behaviour.

Responsibilities
----------------
- At registration time (``on_decore``), build one Pydantic model per helper
  from the route's ``helper_arguments``: each argument is optional (a missing
  value stays the resolver's ``MissingArgument``) but, when given, must be a
  scalar (``str``, ``int``, ``float`` or ``UUID``). ``format`` must be a
  string; ``params`` is unchecked; unknown keys are allowed.
- At call time (``wrap_handler``), validate the merged options before calling
  the helper. The helper still receives the caller's original values.
- Surface failures as Pydantic ``ValidationError`` titled
  ``"Validation error in <helper name>"``.

Fields use generated names with the option key as alias, so an argument may be
called ``schema`` or ``copy`` without shadowing ``BaseModel`` attributes.

Behaviour and data
------------------
- ``entry.metadata["pydantic"] = {"model": model, "arguments": [...]}``.
- Config ``disabled`` (registry-level or per-helper) turns validation into a
  passthrough at call time.
- ``get_model(entry)`` returns ``("pydantic_model", model)`` unless disabled.

Registration
------------
Registers itself as ``"pydantic"`` at import.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple, Union
from uuid import UUID

try:
    from pydantic import ConfigDict, Field, ValidationError, create_model
except ImportError:  # pragma: no cover - import guard
    raise ImportError(
        "Pydantic plugin requires pydantic. Install with: pip install routehelpers"
    )

from routehelpers.core.registry import Registry
from routehelpers.core.resolver import normalize_options
from routehelpers.plugins._base_plugin import BasePlugin, HelperEntry

if TYPE_CHECKING:
    from routehelpers.core.decorated_route import DecoratedRoute

ArgumentValue = Union[str, int, float, UUID]

_ERROR_KEYS = ("type", "loc", "input", "ctx")


class PydanticPlugin(BasePlugin):
    """Validate helper options with Pydantic before building the path."""

    plugin_code = "pydantic"
    plugin_description = "Validates path helper options using Pydantic"

    def __init__(self, registry, **config: Any):
        super().__init__(registry, **config)

    def configure(self, disabled: bool = False):
        """Configure pydantic plugin options.

        The wrapper added by __init_subclass__ handles writing to store.
        """

    def on_decore(self, registry: Any, route: "DecoratedRoute", entry: HelperEntry) -> None:
        if "pydantic" in entry.metadata:
            return
        fields: Dict[str, Any] = {
            f"arg_{index}": (Optional[ArgumentValue], Field(default=None, alias=argument))
            for index, argument in enumerate(route.helper_arguments)
        }
        fields["format_"] = (Optional[str], Field(default=None, alias="format"))
        fields["params_"] = (Any, Field(default=None, alias="params"))
        model = create_model(  # type: ignore[call-overload]
            f"{entry.name}_Options",
            __config__=ConfigDict(extra="allow"),
            **fields,
        )
        entry.metadata["pydantic"] = {
            "model": model,
            "arguments": list(route.helper_arguments),
        }

    def wrap_handler(self, registry: Any, entry: HelperEntry, call_next: Callable):
        """Validate helper options with the cached model before calling."""
        model = entry.metadata.get("pydantic", {}).get("model")
        if model is None:
            return call_next

        def wrapper(options=None, /, **kwargs):
            if self.configuration(entry.name).get("disabled"):
                return call_next(options, **kwargs)
            values = normalize_options(options, **kwargs)
            try:
                model.model_validate(values)
            except ValidationError as exc:
                raise ValidationError.from_exception_data(
                    title=f"Validation error in {entry.name}",
                    line_errors=[
                        {key: err[key] for key in _ERROR_KEYS if key in err}
                        for err in exc.errors()
                    ],
                ) from exc
            return call_next(values)

        return wrapper

    def get_model(self, entry: HelperEntry) -> Optional[Tuple[str, Any]]:
        """Return the Pydantic model for this helper if not disabled."""
        if self.configuration(entry.name).get("disabled"):
            return None
        model = entry.metadata.get("pydantic", {}).get("model")
        if model is None:
            return None
        return ("pydantic_model", model)

    def entry_metadata(self, registry: Any, entry: HelperEntry) -> Dict[str, Any]:
        """Return pydantic metadata for introspection."""
        meta = entry.metadata.get("pydantic", {})
        if not meta:
            return {}
        return {"model": meta.get("model"), "arguments": meta.get("arguments")}


Registry.register_plugin(PydanticPlugin)
