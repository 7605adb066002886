"""
Middlewares: non-terminal links that inspect, transform or drop a delivery
before it reaches a gateway.
"""

from pling.middleware.base import Middleware
from pling.middleware.filter import KindFilter
from pling.middleware.metrics import MetricsMiddleware

__all__ = ["Middleware", "KindFilter", "MetricsMiddleware"]
