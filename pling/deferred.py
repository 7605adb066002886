"""Deferred registry: construct expensive units on first use, exactly once.

Gateways may authenticate against their backend when constructed, so the
registries hold *descriptions* of units and only build them when a delivery
actually needs them.

Entries
-------
- `Pending(factory, args, kwargs)`: not yet constructed.
- `Realized(instance)`: constructed; replaces the pending entry for good.

Accepted shapes for `add()`:
- a `Pending` descriptor
- a class, built as `cls()`
- a tuple `(factory, *args)`, built as `factory(*args)`
- anything else, taken as an already constructed instance

Each slot carries its own lock so concurrent first access constructs an entry
once; the winner stores the instance and the others reuse it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Pending:
    factory: Callable[..., Any]
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def construct(self) -> Any:
        return self.factory(*self.args, **self.kwargs)


@dataclass(frozen=True)
class Realized:
    instance: Any


Entry = Union[Pending, Realized]


def to_entry(obj: Any) -> Entry:
    if isinstance(obj, (Pending, Realized)):
        return obj
    if isinstance(obj, type):
        return Pending(obj)
    if isinstance(obj, tuple) and obj and callable(obj[0]):
        return Pending(obj[0], tuple(obj[1:]))
    return Realized(obj)


class _Slot:
    __slots__ = ("entry", "lock")

    def __init__(self, entry: Entry):
        self.entry = entry
        self.lock = threading.Lock()

    def realize(self) -> Any:
        entry = self.entry
        if isinstance(entry, Realized):
            return entry.instance
        with self.lock:
            # another thread may have won while we waited
            if isinstance(self.entry, Pending):
                self.entry = Realized(self.entry.construct())
            return self.entry.instance


class DeferredRegistry:
    """Ordered collection of pending/realized delivery units."""

    def __init__(self, entries: Optional[Iterable[Any]] = None):
        self._slots: List[_Slot] = []
        self._lock = threading.Lock()
        if entries:
            self.extend(entries)

    def add(self, entry: Any) -> "DeferredRegistry":
        slot = _Slot(to_entry(entry))
        with self._lock:
            self._slots.append(slot)
        return self

    append = add

    def extend(self, entries: Iterable[Any]) -> "DeferredRegistry":
        for entry in entries:
            self.add(entry)
        return self

    def entries(self) -> List[Entry]:
        with self._lock:
            return [slot.entry for slot in self._slots]

    def realized(self) -> List[Any]:
        """Return the instances constructed so far without building anything."""
        return [e.instance for e in self.entries() if isinstance(e, Realized)]

    def realize_all(self) -> List[Any]:
        """Return every instance in insertion order, building pending ones.

        A construction error aborts the call; entries built before it stay
        memoized and are skipped next time.
        """
        with self._lock:
            slots = list(self._slots)
        return [slot.realize() for slot in slots]

    def realize_where(self, predicate: Callable[[Entry], bool]) -> List[Any]:
        """Like `realize_all`, restricted to entries accepted by `predicate`.

        The predicate sees the entry as it is (pending or realized), so
        callers can skip construction of entries they will not use.
        """
        with self._lock:
            slots = list(self._slots)
        return [slot.realize() for slot in slots if predicate(slot.entry)]

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries())

    def __repr__(self) -> str:
        return f"DeferredRegistry({self.entries()!r})"


__all__ = ["DeferredRegistry", "Pending", "Realized", "to_entry"]
