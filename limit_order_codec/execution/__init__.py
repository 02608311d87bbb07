"""Order building, EIP-712 projection, local signing and fill calldata."""

from limit_order_codec.execution.calldata import encode_fill, encode_fill_order, encode_fill_order_args
from limit_order_codec.execution.orders import Order, build_order
from limit_order_codec.execution.signer import LocalOrderSigner, OrderSignature, order_hash
from limit_order_codec.execution.typed_data import OrderData, build_order_data

__all__ = [
    "Order",
    "OrderData",
    "OrderSignature",
    "LocalOrderSigner",
    "build_order",
    "build_order_data",
    "encode_fill",
    "encode_fill_order",
    "encode_fill_order_args",
    "order_hash",
]
