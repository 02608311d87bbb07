"""
Maker and taker trait words.

MakerTraits (signed, part of the order):
    bits 255..247  single-bit flags (see MakerTraitsFlag)
    bits 199..160  series
    bits 159..120  nonce or epoch
    bits 119..80   expiry
    bits  79..0    low 80 bits of the allowed sender

TakerTraits (per fill, passed next to `args`):
    bits 255..251  single-bit flags (see TakerTraitsFlag)
    bits 247..224  extension length in bytes
    bits 223..200  interaction length in bytes
    bits 184..0    threshold amount

`args` is target || extension || interaction with no length prefixes; the
decoder recovers the boundaries from the length fields only.
"""

from dataclasses import asdict, dataclass
from typing import Union

from limit_order_codec.core.errors import InvalidArgument
from limit_order_codec.encoding.flags import (
    MakerTraitsField,
    MakerTraitsFlag,
    TakerTraitsField,
    TakerTraitsFlag,
    flag_bit,
    has_flag,
)
from limit_order_codec.utils.hexutil import (
    ZERO_ADDRESS,
    BytesLike,
    setn,
    to_address,
    to_bytes,
    to_uint,
    to_word_hex,
)

ADDRESS_BYTES = 20


@dataclass(frozen=True)
class MakerTraitsParams:
    """Inputs of build_maker_traits, with the protocol defaults."""

    allowed_sender: str = ZERO_ADDRESS
    should_check_epoch: bool = False
    allow_partial_fill: bool = True
    allow_multiple_fills: bool = True
    use_permit2: bool = False
    unwrap_weth: bool = False
    expiry: int = 0
    nonce: int = 0
    series: int = 0

    def build(self) -> str:
        return build_maker_traits(**asdict(self))


DEFAULT_MAKER_TRAITS = MakerTraitsParams()


def build_maker_traits(
    allowed_sender: str = ZERO_ADDRESS,
    should_check_epoch: bool = False,
    allow_partial_fill: bool = True,
    allow_multiple_fills: bool = True,
    use_permit2: bool = False,
    unwrap_weth: bool = False,
    expiry: int = 0,
    nonce: int = 0,
    series: int = 0,
) -> str:
    """
    Pack maker options into a makerTraits word.

    Args:
        allowed_sender: Only this taker may fill (zero address = anyone)
        should_check_epoch: Validate nonce as an epoch of `series`
        allow_partial_fill: Encoded negated, as the no-partial-fills bit
        allow_multiple_fills: Order may be filled more than once
        use_permit2: Pull maker funds through Permit2
        unwrap_weth: Deliver native ETH instead of WETH to the maker
        expiry: Expiration timestamp, 0 for none (< 2**40)
        nonce: Nonce or epoch (< 2**40)
        series: Epoch series (< 2**40)

    Returns:
        0x-prefixed, 64 hex digit trait word

    Raises:
        InvalidArgument: expiry, nonce or series outside [0, 2**40), or a
            malformed allowed_sender
    """
    fields = {
        MakerTraitsField.EXPIRY: ("Expiry", expiry),
        MakerTraitsField.NONCE: ("Nonce", nonce),
        MakerTraitsField.SERIES: ("Series", series),
    }
    traits = 0
    for field, (label, value) in fields.items():
        bits = field.value
        if isinstance(value, bool) or not isinstance(value, int) or not bits.fits(value):
            raise InvalidArgument(f"{label} should be less than {bits.width} bits, got {value!r}")
        traits |= bits.place(value)

    sender = int(to_address(allowed_sender), 16)
    traits |= sender & MakerTraitsField.ALLOWED_SENDER.value.mask

    traits = setn(traits, MakerTraitsFlag.UNWRAP_WETH, unwrap_weth)
    traits = setn(traits, MakerTraitsFlag.ALLOW_MULTIPLE_FILLS, allow_multiple_fills)
    traits = setn(traits, MakerTraitsFlag.NO_PARTIAL_FILLS, not allow_partial_fill)
    traits = setn(traits, MakerTraitsFlag.NEED_EPOCH_CHECK, should_check_epoch)
    traits = setn(traits, MakerTraitsFlag.USE_PERMIT2, use_permit2)
    return to_word_hex(traits)


@dataclass(frozen=True)
class MakerTraits:
    """A decoded makerTraits word."""

    allowed_sender: int  # low 80 bits only
    should_check_epoch: bool
    allow_partial_fill: bool
    allow_multiple_fills: bool
    use_permit2: bool
    unwrap_weth: bool
    expiry: int
    nonce: int
    series: int
    has_extension: bool
    need_preinteraction: bool
    need_postinteraction: bool


def parse_maker_traits(value: Union[int, str]) -> MakerTraits:
    word = to_uint(value)
    return MakerTraits(
        allowed_sender=MakerTraitsField.ALLOWED_SENDER.value.extract(word),
        should_check_epoch=has_flag(word, MakerTraitsFlag.NEED_EPOCH_CHECK),
        allow_partial_fill=not has_flag(word, MakerTraitsFlag.NO_PARTIAL_FILLS),
        allow_multiple_fills=has_flag(word, MakerTraitsFlag.ALLOW_MULTIPLE_FILLS),
        use_permit2=has_flag(word, MakerTraitsFlag.USE_PERMIT2),
        unwrap_weth=has_flag(word, MakerTraitsFlag.UNWRAP_WETH),
        expiry=MakerTraitsField.EXPIRY.value.extract(word),
        nonce=MakerTraitsField.NONCE.value.extract(word),
        series=MakerTraitsField.SERIES.value.extract(word),
        has_extension=has_flag(word, MakerTraitsFlag.HAS_EXTENSION),
        need_preinteraction=has_flag(word, MakerTraitsFlag.NEED_PREINTERACTION),
        need_postinteraction=has_flag(word, MakerTraitsFlag.NEED_POSTINTERACTION),
    )


@dataclass(frozen=True)
class TakerTraits:
    """Taker trait word plus the args blob passed to fillOrderArgs."""

    traits: int
    args: bytes

    @property
    def traits_hex(self) -> str:
        return to_word_hex(self.traits)


def _length_field(field: TakerTraitsField, label: str, segment: bytes) -> int:
    bits = field.value
    if not bits.fits(len(segment)):
        raise InvalidArgument(
            f"{label} is {len(segment)} bytes, length field holds at most {bits.mask}"
        )
    return bits.place(len(segment))


def build_taker_traits(
    making_amount: bool = False,
    unwrap_weth: bool = False,
    skip_maker_permit: bool = False,
    use_permit2: bool = False,
    target: BytesLike = b"",
    extension: BytesLike = b"",
    interaction: BytesLike = b"",
    threshold: int = 0,
) -> TakerTraits:
    """
    Pack taker options and build the fill `args`.

    Args:
        making_amount: The fill amount is a making (not taking) amount
        unwrap_weth: Deliver native ETH instead of WETH to the taker
        skip_maker_permit: Do not execute the maker permit on this fill
        use_permit2: Pull taker funds through Permit2
        target: Recipient of the maker asset, empty for msg.sender
        extension: Order extension, required on the first fill of an order
            that has one
        interaction: Taker interaction calldata
        threshold: Max taking (or min making) amount, 0 for no limit

    Raises:
        InvalidArgument: a segment longer than its 24-bit length field,
            a target that is not 20 bytes, or a threshold over 185 bits
    """
    target = to_bytes(target)
    extension = to_bytes(extension)
    interaction = to_bytes(interaction)

    if target and len(target) != ADDRESS_BYTES:
        raise InvalidArgument(f"target must be {ADDRESS_BYTES} bytes, got {len(target)}")
    threshold_bits = TakerTraitsField.THRESHOLD.value
    if isinstance(threshold, bool) or not isinstance(threshold, int) or not threshold_bits.fits(threshold):
        raise InvalidArgument(f"threshold should be less than {threshold_bits.width} bits, got {threshold!r}")

    traits = threshold
    if making_amount:
        traits |= flag_bit(TakerTraitsFlag.MAKER_AMOUNT)
    if unwrap_weth:
        traits |= flag_bit(TakerTraitsFlag.UNWRAP_WETH)
    if skip_maker_permit:
        traits |= flag_bit(TakerTraitsFlag.SKIP_ORDER_PERMIT)
    if use_permit2:
        traits |= flag_bit(TakerTraitsFlag.USE_PERMIT2)
    if target:
        traits |= flag_bit(TakerTraitsFlag.ARGS_HAS_TARGET)
    traits |= _length_field(TakerTraitsField.EXTENSION_LENGTH, "extension", extension)
    traits |= _length_field(TakerTraitsField.INTERACTION_LENGTH, "interaction", interaction)

    return TakerTraits(traits=traits, args=target + extension + interaction)


@dataclass(frozen=True)
class ParsedTakerTraits:
    """A decoded taker trait word with args split back into segments."""

    making_amount: bool
    unwrap_weth: bool
    skip_maker_permit: bool
    use_permit2: bool
    target: bytes
    extension: bytes
    interaction: bytes
    threshold: int


def parse_taker_traits(traits: Union[int, str], args: BytesLike = b"") -> ParsedTakerTraits:
    """Split `args` using the length fields of `traits`; lengths must add up exactly."""
    word = to_uint(traits)
    args = to_bytes(args)

    target_len = ADDRESS_BYTES if has_flag(word, TakerTraitsFlag.ARGS_HAS_TARGET) else 0
    extension_len = TakerTraitsField.EXTENSION_LENGTH.value.extract(word)
    interaction_len = TakerTraitsField.INTERACTION_LENGTH.value.extract(word)
    expected = target_len + extension_len + interaction_len
    if len(args) != expected:
        raise InvalidArgument(f"args is {len(args)} bytes, traits describe {expected}")

    extension_end = target_len + extension_len
    return ParsedTakerTraits(
        making_amount=has_flag(word, TakerTraitsFlag.MAKER_AMOUNT),
        unwrap_weth=has_flag(word, TakerTraitsFlag.UNWRAP_WETH),
        skip_maker_permit=has_flag(word, TakerTraitsFlag.SKIP_ORDER_PERMIT),
        use_permit2=has_flag(word, TakerTraitsFlag.USE_PERMIT2),
        target=args[:target_len],
        extension=args[target_len:extension_end],
        interaction=args[extension_end:],
        threshold=TakerTraitsField.THRESHOLD.value.extract(word),
    )
