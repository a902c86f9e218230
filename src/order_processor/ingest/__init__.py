"""Transaction log ingestion"""

from .reader import OrderReader, decode_order

__all__ = ["OrderReader", "decode_order"]
