"""
Gateways: terminal delivery units, one per push backend.
"""

from pling.gateway.base import Gateway, GatewayState
from pling.gateway.c2dm import C2DMGateway
from pling.gateway.noop import NoOpGateway

__all__ = ["Gateway", "GatewayState", "C2DMGateway", "NoOpGateway"]
