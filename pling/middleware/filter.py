"""Device-kind allow/deny filtering.

Mirrors a read/write allowlist policy: `allow` (if set) is the full list of
device kinds that may be delivered to, `deny` removes kinds on top of it.
Anything filtered out is dropped silently; the chain simply stops.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Set

from ..interfaces import Continuation
from ..monitoring import log_event
from .base import Middleware

logger = logging.getLogger(__name__)


def _kinds(values: Any) -> Optional[Set[str]]:
    if not values:
        return None
    if isinstance(values, str):
        values = values.split(",")
    return set(v.strip().lower() for v in values if v and v.strip())


class KindFilter(Middleware):
    def default_configuration(self) -> Dict[str, Any]:
        return {"allow": None, "deny": None}

    def __init__(self, configuration=None):
        super().__init__(configuration)
        self.allow = _kinds(self.configuration["allow"])
        self.deny = _kinds(self.configuration["deny"]) or set()

    def permits(self, device: Any) -> bool:
        kind = str(device.kind).lower()
        if self.allow is not None and kind not in self.allow:
            return False
        return kind not in self.deny

    def deliver(self, message: Any, device: Any, continuation: Continuation) -> Any:
        if not self.permits(device):
            log_event("pling.filter.dropped", {"kind": device.kind, "identifier": device.identifier}, log=logger)
            return None
        return continuation(message, device)


__all__ = ["KindFilter"]
