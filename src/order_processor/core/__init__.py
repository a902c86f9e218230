"""Core configuration for the order processor"""

from .config import Config, parse_duration

__all__ = ["Config", "parse_duration"]
