"""Explicit configuration object for the dispatch pipeline.

Holds the gateway and middleware registries, the adapter slot (gateway
selection) and the logger slot. Build one at startup, configure it, then hand
it to a `Dispatcher`. The slots are read-mostly: reassign them before
deliveries start, not while they are in flight.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from .adapter import GatewayAdapter
from .deferred import DeferredRegistry


def _null_logger() -> logging.Logger:
    log = logging.getLogger("pling")
    if not log.handlers:
        log.addHandler(logging.NullHandler())
    return log


class PlingContext:
    def __init__(
        self,
        gateways: Optional[Iterable[Any]] = None,
        middlewares: Optional[Iterable[Any]] = None,
        adapter: Optional[GatewayAdapter] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.gateways = DeferredRegistry(gateways)
        self.middlewares = DeferredRegistry(middlewares)
        self.adapter = adapter or GatewayAdapter()
        self.logger = logger or _null_logger()

    def configure(self, callback: Optional[Callable[["PlingContext"], Any]] = None, **options: Any) -> "PlingContext":
        """Configure the context with keyword options and/or a callback.

        `gateways` and `middlewares` are appended to the registries; `adapter`
        and `logger` replace the current slots.

        Example:
            ctx.configure(gateways=[(C2DMGateway, {...})], middlewares=[KindFilter])
            ctx.configure(lambda c: c.gateways.add(NoOpGateway({"handles": ["android"]})))
        """
        if callback is None and not options:
            raise ValueError("No configuration given for PlingContext.configure")
        unknown = set(options) - {"gateways", "middlewares", "adapter", "logger"}
        if unknown:
            raise ValueError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")
        if "gateways" in options:
            self.gateways.extend(options["gateways"])
        if "middlewares" in options:
            self.middlewares.extend(options["middlewares"])
        if "adapter" in options:
            self.adapter = options["adapter"]
        if "logger" in options:
            self.logger = options["logger"]
        if callback is not None:
            callback(self)
        return self

    def __repr__(self) -> str:
        return f"PlingContext(gateways={len(self.gateways)}, middlewares={len(self.middlewares)})"


__all__ = ["PlingContext"]
