"""Order delivery

DeliveryClient - HTTP GET per order with outcome classification
DeliveryEngine - Inline retry with backoff and retry queue replay
"""

from .client import DeliveryClient
from .engine import DeliveryEngine, DeliveryResult

__all__ = ["DeliveryClient", "DeliveryEngine", "DeliveryResult"]
