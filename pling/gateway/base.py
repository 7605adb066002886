"""Gateway base class: the terminal link of every delivery stack.

A gateway delivers to one push backend. It declares the device kinds it
handles, owns whatever session state the backend needs (e.g. an auth token)
and never forwards to a continuation.

Lifecycle
---------
UNINITIALIZED -> AUTHENTICATING -> READY      (happy path)
AUTHENTICATING -> FAILED                      (terminal; reconstruct to retry)

`setup()` drives the transitions once under a lock; subclasses put their
backend handshake in `authenticate()`. Once READY, deliveries never
re-authenticate. Tokens are set once and never refreshed in place.
"""

from __future__ import annotations

from enum import Enum
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

from ..configurable import Configurable
from ..convert import convert_device, convert_message
from ..deferred import DeferredRegistry
from ..exceptions import AuthenticationFailed
from ..interfaces import Continuation


class GatewayState(str, Enum):
    UNINITIALIZED = "uninitialized"
    AUTHENTICATING = "authenticating"
    READY = "ready"
    FAILED = "failed"


class Gateway(Configurable):
    """Base class for push backends.

    Subclasses set `handles` (device kinds) and `required_configuration`, and
    implement `deliver_now`. The `handles` configuration option overrides the
    class attribute per instance. The `middlewares` option holds middlewares
    that only run for this gateway, right before its own send.
    """

    handles: Tuple[str, ...] = ()
    required_configuration: Tuple[str, ...] = ()

    def __init__(self, configuration: Optional[Mapping[str, Any]] = None):
        self.setup_configuration(configuration, require=self.required_configuration)
        middlewares = self.configuration.get("middlewares")
        if not isinstance(middlewares, DeferredRegistry):
            self.configuration["middlewares"] = DeferredRegistry(middlewares or [])
        self.state = GatewayState.UNINITIALIZED
        self._state_lock = threading.Lock()

    def default_configuration(self) -> Dict[str, Any]:
        return {"middlewares": DeferredRegistry()}

    @classmethod
    def declared_kinds(cls, configuration: Optional[Mapping[str, Any]] = None) -> Tuple[str, ...]:
        """Device kinds an instance built with `configuration` would handle.

        Lets routing skip constructing gateways that cannot match.
        """
        kinds = (configuration or {}).get("handles") or cls.handles
        if isinstance(kinds, str):
            kinds = (kinds,)
        return tuple(str(k).lower() for k in kinds)

    @property
    def handled_kinds(self) -> Tuple[str, ...]:
        return self.declared_kinds(self.configuration)

    def handles_device(self, device: Any) -> bool:
        return str(device.kind).lower() in self.handled_kinds

    @property
    def ready(self) -> bool:
        return self.state is GatewayState.READY

    # -------- lifecycle --------
    def setup(self) -> None:
        with self._state_lock:
            if self.state is GatewayState.READY:
                return
            if self.state is GatewayState.FAILED:
                raise AuthenticationFailed(
                    f"{type(self).__name__} failed to authenticate earlier; build a new instance to retry"
                )
            self.state = GatewayState.AUTHENTICATING
            try:
                self.authenticate()
            except Exception:
                self.state = GatewayState.FAILED
                raise
            self.state = GatewayState.READY

    def authenticate(self) -> None:
        """One-time backend handshake. No-op for backends without sessions."""

    # -------- delivery --------
    def deliver(self, message: Any, device: Any, continuation: Optional[Continuation] = None) -> Any:
        """Deliver through this gateway's own middlewares, then send.

        `continuation` is accepted so the gateway fits in a delivery stack,
        but it is never called.
        """
        self.setup()
        stack = tuple(self.configuration["middlewares"].realize_all())
        return self._deliver(message, device, stack, 0)

    def _deliver(self, message: Any, device: Any, stack: Tuple[Any, ...], index: int) -> Any:
        message = convert_message(message)
        device = convert_device(device)
        if index >= len(stack):
            return self.deliver_now(message, device)
        return stack[index].deliver(
            message, device, lambda m, d: self._deliver(m, d, stack, index + 1)
        )

    def deliver_now(self, message: Any, device: Any) -> Any:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} handles={','.join(self.handled_kinds)} state={self.state.value}>"


__all__ = ["Gateway", "GatewayState"]
