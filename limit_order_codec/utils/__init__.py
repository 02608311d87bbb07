"""Utilities: hex/address helpers, state store."""

from limit_order_codec.utils.hexutil import setn, to_address, to_bytes, to_hex, to_uint, to_word_hex, trim0x
from limit_order_codec.utils.state_store import StateStore

__all__ = [
    "setn",
    "to_address",
    "to_bytes",
    "to_hex",
    "to_uint",
    "to_word_hex",
    "trim0x",
    "StateStore",
]
