"""Conversion of arbitrary caller objects into canonical values.

This is the only place where caller types enter the pipeline. An object is
accepted purely by capability: it must expose `to_pling_message()` or
`to_pling_device()` depending on the role it plays.
"""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidInput

KINDS = ("message", "device")


def capability_name(kind: str) -> str:
    return f"to_pling_{kind}"


def convert(obj: Any, kind: str) -> Any:
    """Convert `obj` to the canonical value for `kind` ('message' or 'device').

    Raises InvalidInput when the object does not implement the capability.
    """
    if kind not in KINDS:
        raise ValueError(f"Unknown conversion kind '{kind}'")
    method = capability_name(kind)
    capability = getattr(obj, method, None) if obj is not None else None
    if not callable(capability):
        raise InvalidInput(f"Instances of {type(obj).__name__} do not implement #{method}")
    return capability()


def convert_message(obj: Any) -> Any:
    return convert(obj, "message")


def convert_device(obj: Any) -> Any:
    return convert(obj, "device")


__all__ = ["convert", "convert_message", "convert_device", "capability_name"]
