"""Canonical Message and Device values.

Both are frozen dataclasses; middlewares that want to change a value build a
new one with `replace()` instead of mutating what they were handed.

Usage:
    msg = Message("Hello", badge=1)
    dev = Device("registration-id", "android")
    louder = msg.replace(sound="alert.caf")
"""

from __future__ import annotations

from dataclasses import dataclass, replace as _replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Message:
    """A push notification message.

    Only `body` is required. Gateways read the optional fields they support
    and ignore the rest. `payload` holds arbitrary key/value pairs that some
    backends forward as extra fields.
    """

    body: str
    badge: Optional[int] = None
    sound: Optional[str] = None
    subject: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None

    def valid(self) -> bool:
        return bool(self.body)

    def replace(self, **changes: Any) -> "Message":
        return _replace(self, **changes)

    def to_pling_message(self) -> "Message":
        return self


@dataclass(frozen=True)
class Device:
    """A device addressed by a backend token.

    `kind` is the tag gateways use to decide whether they handle the device
    (e.g. 'android', 'c2dm', 'iphone').
    """

    identifier: str
    kind: str

    def valid(self) -> bool:
        return bool(self.identifier) and bool(self.kind)

    def replace(self, **changes: Any) -> "Device":
        return _replace(self, **changes)

    def to_pling_device(self) -> "Device":
        return self


__all__ = ["Message", "Device"]
