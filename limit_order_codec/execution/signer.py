"""
Local EIP-712 order signer.

Signing is the only step after the pure codec: it receives a complete
OrderData and returns an opaque OrderSignature. The settlement contract
takes the signature in EIP-2098 compact form (r, vs).
"""

from dataclasses import dataclass
from typing import Tuple

from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_hash.auto import keccak

from limit_order_codec.execution.typed_data import OrderData
from limit_order_codec.utils.hexutil import to_word_hex

S_BITS = 255


@dataclass(frozen=True)
class OrderSignature:
    r: int
    s: int
    v: int  # 27 or 28
    signature: bytes  # 65-byte r || s || v

    def compact(self) -> Tuple[int, int]:
        """EIP-2098 (r, vs): the y-parity bit is folded into the top bit of s."""
        vs = ((self.v - 27) << S_BITS) | self.s
        return self.r, vs

    def compact_hex(self) -> Tuple[str, str]:
        r, vs = self.compact()
        return to_word_hex(r), to_word_hex(vs)


def signable_message(order_data: OrderData) -> SignableMessage:
    return encode_typed_data(full_message=order_data.to_typed_data())


def order_hash(order_data: OrderData) -> bytes:
    """EIP-712 digest of the order, as computed by hashOrder on-chain."""
    message = signable_message(order_data)
    return keccak(b"\x19" + message.version + message.header + message.body)


def recover_order_signer(order_data: OrderData, signature: bytes) -> str:
    return Account.recover_message(signable_message(order_data), signature=signature)


class LocalOrderSigner:
    """Signs orders with an in-process private key."""

    def __init__(self, private_key: str):
        """
        Args:
            private_key: Hex private key of the maker (or its EIP-1271 signer)
        """
        self.account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self.account.address

    def sign(self, order_data: OrderData) -> OrderSignature:
        signed = self.account.sign_message(signable_message(order_data))
        print(f"[Signer] Signed order {signed.message_hash.hex()} as {self.address}")
        return OrderSignature(
            r=signed.r,
            s=signed.s,
            v=signed.v,
            signature=bytes(signed.signature),
        )
