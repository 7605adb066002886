"""Dispatcher: runs a (message, device) pair through the delivery stack.

The stack is an immutable tuple walked with an explicit index, so each
`deliver` call is reentrant and nothing is shared between concurrent calls.
Each unit gets a continuation that re-runs the algorithm (conversion
included) on the rest of the stack; a middleware that never calls it ends
the delivery there.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from .context import PlingContext
from .convert import convert_device, convert_message
from .exceptions import NoGatewayFound


class Dispatcher:
    def __init__(self, context: Optional[PlingContext] = None):
        self.context = context or PlingContext()

    def build_stack(self, device: Any) -> Tuple[Any, ...]:
        """Default stack: realized middlewares followed by matching gateways."""
        gateways = self.context.adapter.select(self.context.gateways, device)
        middlewares = self.context.middlewares.realize_all()
        return tuple(middlewares) + tuple(gateways)

    def deliver(self, message: Any, device: Any, stack: Optional[Sequence[Any]] = None) -> Any:
        """Deliver `message` to `device`.

        `message` / `device` may be any objects implementing
        `to_pling_message()` / `to_pling_device()`. `stack` overrides the
        default pipeline. Errors from any link propagate unchanged.
        """
        message = convert_message(message)
        device = convert_device(device)
        self.context.logger.info("Delivering %r to %r", message, device)
        units = self.build_stack(device) if stack is None else tuple(stack)
        return self._dispatch(message, device, units, 0)

    def _dispatch(self, message: Any, device: Any, stack: Tuple[Any, ...], index: int) -> Any:
        message = convert_message(message)
        device = convert_device(device)
        if index >= len(stack):
            raise NoGatewayFound(f"Delivery stack exhausted before a gateway handled {device!r}")
        unit = stack[index]
        return unit.deliver(message, device, lambda m, d: self._dispatch(m, d, stack, index + 1))


__all__ = ["Dispatcher"]
