from typing import Any, List, Mapping

from .deferred import DeferredRegistry, Realized
from .exceptions import NoGatewayFound


def _may_handle(entry: Any, kind: str) -> bool:
    if isinstance(entry, Realized):
        return True
    declared = getattr(entry.factory, "declared_kinds", None)
    if declared is None:
        # unknown until built
        return True
    configuration = entry.args[0] if entry.args else entry.kwargs.get("configuration")
    if not isinstance(configuration, Mapping):
        configuration = None
    return kind in declared(configuration)


class GatewayAdapter:
    """Selects the gateways a device is routed to.

    Keeps registration order. Pending gateways whose declared kinds cannot
    match are left unbuilt. The first selected gateway terminates the chain;
    the rest only matter to custom adapters or explicit stacks. Replace
    `context.adapter` to change routing.
    """

    def select(self, gateways: DeferredRegistry, device: Any) -> List[Any]:
        kind = str(device.kind).lower()
        candidates = gateways.realize_where(lambda entry: _may_handle(entry, kind))
        matching = [g for g in candidates if g.handles_device(device)]
        if not matching:
            raise NoGatewayFound(f"Could not find a gateway for {device!r}")
        return matching


__all__ = ["GatewayAdapter"]
