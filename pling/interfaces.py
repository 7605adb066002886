from typing import Any, Callable, Protocol

"""Pipeline Interface Contracts.

Purpose:
    This module defines the contracts shared by every part of the dispatch
    pipeline: what a caller object must expose to be converted into a Message
    or Device, and what a delivery unit (middleware or gateway) must expose to
    sit in a delivery stack.

Contents:
    - MessageConvertible / DeviceConvertible: the conversion capabilities.
    - Continuation: the callable a unit invokes to forward downstream.
    - DeliveryUnit: the contract for middlewares and gateways.

How to Use:
    - Callers: give your own classes a `to_pling_message()` or
      `to_pling_device()` method returning a `pling.Message` / `pling.Device`.
    - Implementers: subclass `pling.middleware.Middleware` or
      `pling.gateway.Gateway`, or provide a compatible `deliver` method.
"""


class MessageConvertible(Protocol):
    def to_pling_message(self) -> Any:
        """Return the canonical `pling.Message` for this object."""


class DeviceConvertible(Protocol):
    def to_pling_device(self) -> Any:
        """Return the canonical `pling.Device` for this object."""


Continuation = Callable[[Any, Any], Any]


class DeliveryUnit(Protocol):
    """A link in a delivery stack.

    Middlewares forward by calling `continuation(message, device)` (possibly
    with new values) or stop the chain by not calling it. Gateways are always
    terminal and never call it.
    """

    def deliver(self, message: Any, device: Any, continuation: Continuation) -> Any:
        ...


__all__ = ["MessageConvertible", "DeviceConvertible", "Continuation", "DeliveryUnit"]
