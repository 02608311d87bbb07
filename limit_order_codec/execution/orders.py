"""
Order data structure (Order) and the order builder.
"""

from dataclasses import dataclass
from typing import Optional, Union

from eth_hash.auto import keccak

from limit_order_codec.encoding.extension import ExtensionSegments, build_extension
from limit_order_codec.encoding.flags import MakerTraitsFlag, flag_bit
from limit_order_codec.encoding.traits import DEFAULT_MAKER_TRAITS
from limit_order_codec.utils.hexutil import ZERO_ADDRESS, to_address, to_hex, to_uint, to_word_hex

# Salt of an order with an extension commits to the low 160 bits of keccak256(extension)
EXTENSION_HASH_BITS = 160
EXTENSION_SALT_MASK = (1 << EXTENSION_HASH_BITS) - 1

DEFAULT_SALT = 1


@dataclass(frozen=True)
class Order:
    """
    Limit order as signed by the maker and decoded on-chain.

    Field order matches the Order struct of the settlement contract.
    """

    salt: int
    maker: str
    receiver: str
    maker_asset: str
    taker_asset: str
    making_amount: int  # Base units of maker_asset
    taking_amount: int  # Base units of taker_asset
    maker_traits: int
    extension: bytes = b""  # Not signed directly; committed via salt

    def to_message(self) -> dict:
        """The eight signed fields, keyed by their EIP-712 names."""
        return {
            "salt": self.salt,
            "maker": self.maker,
            "receiver": self.receiver,
            "makerAsset": self.maker_asset,
            "takerAsset": self.taker_asset,
            "makingAmount": self.making_amount,
            "takingAmount": self.taking_amount,
            "makerTraits": self.maker_traits,
        }

    def to_dict(self) -> dict:
        """JSON-friendly rendering: 64-digit hex words, hex extension."""
        record = self.to_message()
        record["salt"] = to_word_hex(self.salt)
        record["makerTraits"] = to_word_hex(self.maker_traits)
        record["extension"] = to_hex(self.extension)
        return record

    def to_abi_tuple(self) -> tuple:
        """Values of the order tuple argument, in ORDER_ABI component order."""
        return tuple(self.to_message().values())


def extension_salt(extension: bytes) -> int:
    return int.from_bytes(keccak(extension), "big") & EXTENSION_SALT_MASK


def build_order(
    maker: str,
    maker_asset: str,
    taker_asset: str,
    making_amount: int,
    taking_amount: int,
    salt: Union[int, str] = DEFAULT_SALT,
    receiver: str = ZERO_ADDRESS,
    maker_traits: Optional[Union[int, str]] = None,
    extension: Optional[ExtensionSegments] = None,
) -> Order:
    """
    Assemble an order and bind its extension.

    Steps:
    1. Build the extension blob from `extension` segments
    2. Non-empty extension: salt = low 160 bits of keccak256(extension),
       HAS_EXTENSION set
    3. Non-empty pre-interaction: NEED_PREINTERACTION set
    4. Non-empty post-interaction: NEED_POSTINTERACTION set

    Args:
        maker: Maker address
        maker_asset: Token the maker gives
        taker_asset: Token the maker receives
        making_amount: Amount of maker_asset
        taking_amount: Amount of taker_asset
        salt: Order uniqueness value (int or 0x-prefixed hex), replaced when
            an extension is present
        receiver: Recipient of taker_asset, zero address for the maker
        maker_traits: Trait word (int or 0x-prefixed hex), defaults to DEFAULT_MAKER_TRAITS
        extension: Extension segments, None for no extension

    Returns:
        Immutable Order

    Raises:
        InvalidArgument: malformed address, amount, salt or trait word
    """
    if maker_traits is None:
        maker_traits = DEFAULT_MAKER_TRAITS.build()
    if extension is None:
        extension = ExtensionSegments()

    salt = to_uint(salt)
    traits = to_uint(maker_traits)
    maker = to_address(maker)
    receiver = to_address(receiver)
    maker_asset = to_address(maker_asset)
    taker_asset = to_address(taker_asset)
    making_amount = to_uint(making_amount)
    taking_amount = to_uint(taking_amount)

    blob = build_extension(extension)
    if blob:
        salt = extension_salt(blob)
        traits |= flag_bit(MakerTraitsFlag.HAS_EXTENSION)
    if extension.pre_interaction:
        traits |= flag_bit(MakerTraitsFlag.NEED_PREINTERACTION)
    if extension.post_interaction:
        traits |= flag_bit(MakerTraitsFlag.NEED_POSTINTERACTION)

    return Order(
        salt=salt,
        maker=maker,
        receiver=receiver,
        maker_asset=maker_asset,
        taker_asset=taker_asset,
        making_amount=making_amount,
        taking_amount=taking_amount,
        maker_traits=traits,
        extension=blob,
    )
