"""
Hex, integer and address helpers shared by the encoders.

Everything here raises InvalidArgument on malformed input instead of
clamping or truncating.
"""

import string
from typing import Union

from eth_utils import is_address, to_checksum_address

from limit_order_codec.core.errors import InvalidArgument

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

BytesLike = Union[bytes, bytearray, str, None]


def trim0x(value: str) -> str:
    """Strip a leading 0x prefix, if any."""
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def to_bytes(value: BytesLike) -> bytes:
    """
    Normalise a byte segment.

    Accepts raw bytes or a hex string (with or without 0x). None, "" and
    "0x" all mean an absent (zero-length) segment.
    """
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise InvalidArgument(f"expected bytes or hex string, got {type(value).__name__}")
    digits = hex_digits(trim0x(value), value)
    if len(digits) % 2:
        raise InvalidArgument(f"hex string has odd length: {value!r}")
    return bytes.fromhex(digits)


def hex_digits(digits: str, original: str) -> str:
    """Return `digits` unchanged if it holds hex digits only (no spaces or underscores)."""
    if not all(c in string.hexdigits for c in digits):
        raise InvalidArgument(f"invalid hex string: {original!r}")
    return digits


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def to_uint(value: Union[int, str], bits: int = 256) -> int:
    """
    Parse an unsigned integer of at most `bits` bits.

    Strings must be 0x-prefixed hex: an unprefixed word is ambiguous between
    hex and decimal and is rejected.
    """
    if isinstance(value, bool):
        raise InvalidArgument("expected an integer, got bool")
    if isinstance(value, str):
        if not value.startswith(("0x", "0X")):
            raise InvalidArgument(f"integer strings must be 0x-prefixed hex, got {value!r}")
        digits = hex_digits(value[2:], value)
        if not digits:
            raise InvalidArgument(f"empty hex integer: {value!r}")
        value = int(digits, 16)
    if not isinstance(value, int):
        raise InvalidArgument(f"expected an integer, got {type(value).__name__}")
    if value < 0 or value >= (1 << bits):
        raise InvalidArgument(f"value {value} does not fit in uint{bits}")
    return value


def to_word_hex(value: int) -> str:
    """Render a uint256 as 0x + 64 zero-padded lowercase hex digits."""
    return "0x" + format(to_uint(value), "064x")


def to_address(value: str) -> str:
    """Validate a 20-byte address and return its EIP-55 checksum form."""
    if not isinstance(value, str) or not is_address(value):
        raise InvalidArgument(f"invalid address: {value!r}")
    return to_checksum_address(value)


def setn(num: int, bit: int, value: bool) -> int:
    """Set (value truthy) or clear bit `bit` of `num`."""
    if value:
        return num | (1 << bit)
    return num & ~(1 << bit)
