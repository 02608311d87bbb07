"""Core components: config and errors."""

from limit_order_codec.core.config import Config
from limit_order_codec.core.errors import InvalidArgument

__all__ = [
    "Config",
    "InvalidArgument",
]
