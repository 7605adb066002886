"""
Pling: push-notification dispatch.

A (message, device) pair is converted into canonical values, run through the
configured middlewares and handed to the first gateway that handles the
device kind.

    import pling
    from pling.gateway import C2DMGateway

    pling.configure(gateways=[(C2DMGateway, {"email": ..., "password": ..., "source": ...})])
    pling.deliver(pling.Message("Hello"), pling.Device("registration-id", "android"))

The module-level helpers use `default_context`; build your own
`PlingContext` + `Dispatcher` for isolated pipelines.
"""

from pling.context import PlingContext
from pling.deferred import DeferredRegistry, Pending, Realized
from pling.dispatcher import Dispatcher
from pling.exceptions import (
    AuthenticationFailed,
    DeliveryFailed,
    InvalidInput,
    MissingConfiguration,
    NoGatewayFound,
    PlingError,
)
from pling.models import Device, Message

default_context = PlingContext()


def configure(callback=None, **options):
    """Configure the process-wide default context (see PlingContext.configure)."""
    return default_context.configure(callback, **options)


def deliver(message, device, stack=None):
    """Deliver through the default context."""
    return Dispatcher(default_context).deliver(message, device, stack)


__all__ = [
    "PlingContext",
    "Dispatcher",
    "DeferredRegistry",
    "Pending",
    "Realized",
    "Message",
    "Device",
    "PlingError",
    "InvalidInput",
    "MissingConfiguration",
    "AuthenticationFailed",
    "NoGatewayFound",
    "DeliveryFailed",
    "default_context",
    "configure",
    "deliver",
]
