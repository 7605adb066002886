from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from .exceptions import MissingConfiguration


class Configurable:
    """Mixin holding a per-instance configuration mapping.

    Subclasses override `default_configuration()`; caller values are merged on
    top of the defaults so they always win. Required keys are checked right
    away, before any setup work (e.g. network authentication) happens.
    """

    configuration: Dict[str, Any]

    def default_configuration(self) -> Dict[str, Any]:
        return {}

    def setup_configuration(
        self, configuration: Optional[Mapping[str, Any]] = None, require: Iterable[str] = ()
    ) -> Dict[str, Any]:
        merged = self.default_configuration()
        merged.update(configuration or {})
        self.configuration = merged
        self.require_configuration(require)
        return merged

    def require_configuration(self, keys: Iterable[str], message: Optional[str] = None) -> None:
        missing = [k for k in keys if k not in self.configuration]
        if missing:
            raise MissingConfiguration(
                message or f"{type(self).__name__} is missing option(s): {', '.join(missing)}"
            )


__all__ = ["Configurable"]
