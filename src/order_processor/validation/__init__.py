"""Validation models for external input"""

from .orders import OrderRecord

__all__ = ["OrderRecord"]
