from typing import Any, Dict, List, Tuple

from .base import Gateway


class NoOpGateway(Gateway):
    """A gateway that performs no network calls, for tests and dry-run mode.

    Every delivery is recorded in `deliveries` as a `(message, device)` pair
    unless the gateway is `disabled`, in which case deliveries are dropped.
    Device kinds come from the `handles` option.
    """

    def __init__(self, configuration=None):
        super().__init__(configuration)
        self.deliveries: List[Tuple[Any, Any]] = []

    def default_configuration(self) -> Dict[str, Any]:
        config = super().default_configuration()
        config.update({"handles": (), "disabled": False})
        return config

    def deliver_now(self, message: Any, device: Any) -> None:
        if self.configuration["disabled"]:
            return
        self.deliveries.append((message, device))


__all__ = ["NoOpGateway"]
