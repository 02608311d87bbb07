"""
EIP-712 projection of an Order.

The extension is deliberately absent from the Order type: a non-empty
extension forces the salt to commit to its hash, so signing the salt signs
the extension.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from limit_order_codec.execution.orders import Order
from limit_order_codec.utils.hexutil import to_address

PROTOCOL_NAME = "1inch Limit Order Protocol"
PROTOCOL_VERSION = "4"
PRIMARY_TYPE = "Order"

ORDER_TYPE = [
    {"name": "salt", "type": "uint256"},
    {"name": "maker", "type": "address"},
    {"name": "receiver", "type": "address"},
    {"name": "makerAsset", "type": "address"},
    {"name": "takerAsset", "type": "address"},
    {"name": "makingAmount", "type": "uint256"},
    {"name": "takingAmount", "type": "uint256"},
    {"name": "makerTraits", "type": "uint256"},
]

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

# ABI tuple of the `order` argument of fillOrder / fillOrderArgs
ORDER_ABI = {
    "type": "tuple",
    "name": "order",
    "components": ORDER_TYPE,
}


def _frozen_fields(fields: list) -> tuple:
    return tuple(MappingProxyType(dict(f)) for f in fields)


@dataclass(frozen=True)
class OrderData:
    """Domain / types / value triple handed to a signer. Read-only."""

    domain: Mapping
    types: Mapping
    value: Mapping

    def to_typed_data(self) -> dict:
        """Full EIP-712 message, as accepted by eth_account.messages.encode_typed_data."""
        types = {"EIP712Domain": [dict(f) for f in EIP712_DOMAIN_TYPE]}
        for name, fields in self.types.items():
            types[name] = [dict(f) for f in fields]
        return {
            "types": types,
            "primaryType": PRIMARY_TYPE,
            "domain": dict(self.domain),
            "message": dict(self.value),
        }


def build_order_data(chain_id: int, verifying_contract: str, order: Order) -> OrderData:
    return OrderData(
        domain=MappingProxyType({
            "name": PROTOCOL_NAME,
            "version": PROTOCOL_VERSION,
            "chainId": chain_id,
            "verifyingContract": to_address(verifying_contract),
        }),
        types=MappingProxyType({PRIMARY_TYPE: _frozen_fields(ORDER_TYPE)}),
        value=MappingProxyType(order.to_message()),
    )
