from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from ..configurable import Configurable
from ..interfaces import Continuation


class Middleware(Configurable):
    """Base class for non-terminal links in a delivery stack.

    The default `deliver` passes the pair through unchanged. Subclasses may
    forward new values (`message.replace(...)`) or stop the chain by not
    calling `continuation` at all.
    """

    required_configuration: Tuple[str, ...] = ()

    def __init__(self, configuration: Optional[Mapping[str, Any]] = None):
        self.setup_configuration(configuration, require=self.required_configuration)

    def default_configuration(self) -> Dict[str, Any]:
        return {}

    def deliver(self, message: Any, device: Any, continuation: Continuation) -> Any:
        return continuation(message, device)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


__all__ = ["Middleware"]
