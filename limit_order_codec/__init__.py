"""
Limit Order Codec

Encodes 1inch Limit Order Protocol v4 orders for off-chain signing and
on-chain filling.

Components:
- Trait encoder: packs maker/taker options into 256-bit trait words
- Extension builder: concatenates extension segments behind an offsets word
- Order builder: assembles the order, commits the salt to the extension
- Typed data: projects the order into an EIP-712 domain/types/value triple
- Signer: local eth-account signer returning compact (r, vs) signatures
"""

__version__ = "0.1.0"

from limit_order_codec.core.errors import InvalidArgument
from limit_order_codec.encoding import (
    DEFAULT_MAKER_TRAITS,
    ExtensionSegments,
    MakerTraitsParams,
    build_extension,
    build_maker_traits,
    build_taker_traits,
)
from limit_order_codec.execution import Order, OrderData, build_order, build_order_data

__all__ = [
    "DEFAULT_MAKER_TRAITS",
    "ExtensionSegments",
    "InvalidArgument",
    "MakerTraitsParams",
    "Order",
    "OrderData",
    "build_extension",
    "build_maker_traits",
    "build_order",
    "build_order_data",
    "build_taker_traits",
]
