"""
Bit-position tables for the maker and taker trait words.

Single source of truth for the encoders in traits.py and for every decoder
(including the ones used by the tests). Positions must match the on-chain
MakerTraitsLib / TakerTraitsLib of Limit Order Protocol v4.
"""

from enum import Enum, IntEnum
from typing import NamedTuple


class BitField(NamedTuple):
    """A contiguous bit range [offset, offset + width) of a 256-bit word."""

    offset: int
    width: int

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def fits(self, value: int) -> bool:
        return 0 <= value <= self.mask

    def place(self, value: int) -> int:
        """Shift `value` into position. Caller checks `fits` first."""
        return value << self.offset

    def extract(self, word: int) -> int:
        return (word >> self.offset) & self.mask


class MakerTraitsFlag(IntEnum):
    """Single-bit maker flags (bit index)."""

    NO_PARTIAL_FILLS = 255
    ALLOW_MULTIPLE_FILLS = 254
    NEED_PREINTERACTION = 252
    NEED_POSTINTERACTION = 251
    NEED_EPOCH_CHECK = 250
    HAS_EXTENSION = 249
    USE_PERMIT2 = 248
    UNWRAP_WETH = 247


class MakerTraitsField(Enum):
    """Multi-bit maker fields."""

    SERIES = BitField(160, 40)
    NONCE = BitField(120, 40)
    EXPIRY = BitField(80, 40)
    ALLOWED_SENDER = BitField(0, 80)  # low 80 bits of the sender address


class TakerTraitsFlag(IntEnum):
    """Single-bit taker flags (bit index)."""

    MAKER_AMOUNT = 255
    UNWRAP_WETH = 254
    SKIP_ORDER_PERMIT = 253
    USE_PERMIT2 = 252
    ARGS_HAS_TARGET = 251


class TakerTraitsField(Enum):
    """Multi-bit taker fields."""

    EXTENSION_LENGTH = BitField(224, 24)
    INTERACTION_LENGTH = BitField(200, 24)
    THRESHOLD = BitField(0, 185)


# Extension offset word: eight 32-bit cumulative end offsets, slot i at bits [32*i, 32*i+32)
OFFSET_SLOT_BITS = 32
OFFSET_WORD_BYTES = 32


def flag_bit(flag: IntEnum) -> int:
    return 1 << int(flag)


def has_flag(word: int, flag: IntEnum) -> bool:
    return bool(word & flag_bit(flag))
