"""Batch order processor

Reads a transaction log, filters orders by symbol and side and fetches
each matching order from an HTTP endpoint, retrying failures.
"""

from .core.config import Config
from .delivery import DeliveryClient, DeliveryEngine, DeliveryResult
from .domain.models import Order
from .ingest import OrderReader, decode_order
from .processor import OrderProcessor, RunSummary

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DeliveryClient",
    "DeliveryEngine",
    "DeliveryResult",
    "Order",
    "OrderProcessor",
    "OrderReader",
    "RunSummary",
    "decode_order",
]
