from __future__ import annotations

import time
from typing import Any, Dict

from .. import metrics
from ..interfaces import Continuation
from .base import Middleware


class MetricsMiddleware(Middleware):
    """Time the rest of the chain and record the outcome per device kind.

    Outcomes go to the `stats` option (the process-wide `pling.metrics.stats`
    unless another `DeliveryStats` is passed). Errors are recorded and
    re-raised untouched.
    """

    def default_configuration(self) -> Dict[str, Any]:
        return {"stats": None}

    @property
    def stats(self) -> metrics.DeliveryStats:
        return self.configuration["stats"] or metrics.stats

    def deliver(self, message: Any, device: Any, continuation: Continuation) -> Any:
        start = time.time()
        ok = False
        try:
            result = continuation(message, device)
            ok = True
            return result
        finally:
            self.stats.record(device.kind, (time.time() - start) * 1000.0, ok=ok)


__all__ = ["MetricsMiddleware"]
