"""
Fill calldata for the settlement contract.

    fillOrder(order, r, vs, amount, takerTraits)
    fillOrderArgs(order, r, vs, amount, takerTraits, args)

The contract's Address, MakerTraits and TakerTraits are uint256 value types,
so the selectors are taken over all-uint256 signatures. An address and a
uint256 ABI-encode to the same 32-byte word.
"""

from eth_abi import encode
from eth_hash.auto import keccak

from limit_order_codec.core.errors import InvalidArgument
from limit_order_codec.encoding.traits import TakerTraits
from limit_order_codec.execution.orders import Order
from limit_order_codec.execution.typed_data import ORDER_ABI
from limit_order_codec.utils.hexutil import to_uint

ORDER_TUPLE = "(" + ",".join(c["type"] for c in ORDER_ABI["components"]) + ")"
ORDER_TUPLE_SIGNATURE = "(" + ",".join(["uint256"] * len(ORDER_ABI["components"])) + ")"

FILL_ORDER_SIGNATURE = f"fillOrder({ORDER_TUPLE_SIGNATURE},bytes32,bytes32,uint256,uint256)"
FILL_ORDER_ARGS_SIGNATURE = f"fillOrderArgs({ORDER_TUPLE_SIGNATURE},bytes32,bytes32,uint256,uint256,bytes)"


def selector(signature: str) -> bytes:
    return keccak(signature.encode())[:4]


def _word(value: int) -> bytes:
    return to_uint(value).to_bytes(32, "big")


def encode_fill_order(order: Order, r: int, vs: int, amount: int, taker_traits: TakerTraits) -> bytes:
    """
    Calldata for fillOrder.

    Args:
        order: Signed order
        r, vs: Compact signature (OrderSignature.compact())
        amount: Fill amount; taking amount unless MAKER_AMOUNT is set
        taker_traits: Taker trait word; its args must be empty

    Raises:
        InvalidArgument: taker traits carry args (use encode_fill_order_args)
            or a value does not fit its word
    """
    if taker_traits.args:
        raise InvalidArgument("taker traits carry args, use fillOrderArgs")
    body = encode(
        [ORDER_TUPLE, "bytes32", "bytes32", "uint256", "uint256"],
        [order.to_abi_tuple(), _word(r), _word(vs), to_uint(amount), taker_traits.traits],
    )
    return selector(FILL_ORDER_SIGNATURE) + body


def encode_fill_order_args(order: Order, r: int, vs: int, amount: int, taker_traits: TakerTraits) -> bytes:
    """Calldata for fillOrderArgs, passing taker_traits.args (target, extension, interaction)."""
    body = encode(
        [ORDER_TUPLE, "bytes32", "bytes32", "uint256", "uint256", "bytes"],
        [order.to_abi_tuple(), _word(r), _word(vs), to_uint(amount), taker_traits.traits, taker_traits.args],
    )
    return selector(FILL_ORDER_ARGS_SIGNATURE) + body


def encode_fill(order: Order, r: int, vs: int, amount: int, taker_traits: TakerTraits) -> bytes:
    """fillOrderArgs when the taker traits carry args, fillOrder otherwise."""
    if taker_traits.args:
        return encode_fill_order_args(order, r, vs, amount, taker_traits)
    return encode_fill_order(order, r, vs, amount, taker_traits)
