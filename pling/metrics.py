"""Per-kind delivery statistics kept in process.

`MetricsMiddleware` records one outcome per delivery attempt into `stats`;
`snapshot()` returns plain rows (one per device kind) suitable for JSON.
There is no exporter; callers that want one read the snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
import threading
from typing import Any, Dict, List, Optional


@dataclass
class KindStats:
    delivered: int = 0
    failed: int = 0
    total_ms: float = 0.0
    min_ms: Optional[float] = None
    max_ms: Optional[float] = None

    @property
    def attempts(self) -> int:
        return self.delivered + self.failed

    def add(self, ms: float, ok: bool) -> None:
        if ok:
            self.delivered += 1
        else:
            self.failed += 1
        self.total_ms += ms
        self.min_ms = ms if self.min_ms is None else min(self.min_ms, ms)
        self.max_ms = ms if self.max_ms is None else max(self.max_ms, ms)

    def as_row(self, kind: str) -> Dict[str, Any]:
        return {
            "kind": kind,
            "delivered": self.delivered,
            "failed": self.failed,
            "lat_min_ms": round(self.min_ms or 0.0, 2),
            "lat_max_ms": round(self.max_ms or 0.0, 2),
            "lat_avg_ms": round(self.total_ms / self.attempts, 2) if self.attempts else 0.0,
        }


class DeliveryStats:
    """Thread-safe map of device kind -> `KindStats`."""

    def __init__(self):
        self._lock = threading.Lock()
        self._kinds: Dict[str, KindStats] = {}

    def record(self, kind: str, ms: float, ok: bool = True) -> None:
        with self._lock:
            self._kinds.setdefault(str(kind).lower(), KindStats()).add(ms, ok)

    def get(self, kind: str) -> Optional[KindStats]:
        with self._lock:
            found = self._kinds.get(str(kind).lower())
            return None if found is None else KindStats(**vars(found))

    def snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [self._kinds[kind].as_row(kind) for kind in sorted(self._kinds)]

    def reset(self) -> None:
        with self._lock:
            self._kinds.clear()


stats = DeliveryStats()


def snapshot() -> List[Dict[str, Any]]:
    return stats.snapshot()


def reset() -> None:
    stats.reset()


__all__ = ["KindStats", "DeliveryStats", "stats", "snapshot", "reset"]
