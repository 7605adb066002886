"""Exception hierarchy for the dispatch pipeline.

Explicit exception types let callers tell apart bad input, configuration
mistakes, backend authentication problems, routing misses and per-delivery
failures. Every error raised inside a gateway or middleware propagates
unchanged through the chain to the original caller.
"""

from __future__ import annotations

from typing import Any, Optional


class PlingError(Exception):
    """Base class for all pling errors."""


class InvalidInput(PlingError):
    """Raised when an object lacks the conversion capability for its role."""


class MissingConfiguration(PlingError):
    """Raised when a gateway or middleware is built without a required option."""


class AuthenticationFailed(PlingError):
    """Raised when a backend rejects credentials or returns no usable token."""


class NoGatewayFound(PlingError):
    """Raised when no registered gateway handles the device kind."""


class DeliveryFailed(PlingError):
    """Raised when a backend rejects or fails to process a single delivery.

    Carries the offending message and device so callers can retry or
    dead-letter them, plus the raw response details when available.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        pling_message: Any = None,
        pling_device: Any = None,
        status: Optional[int] = None,
        body: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.pling_message = pling_message
        self.pling_device = pling_device
        self.status = status
        self.body = body
        self.error_code = error_code


__all__ = [
    "PlingError",
    "InvalidInput",
    "MissingConfiguration",
    "AuthenticationFailed",
    "NoGatewayFound",
    "DeliveryFailed",
]
