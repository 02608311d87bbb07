"""Trait bitfields and the extension blob."""

from limit_order_codec.encoding.extension import ExtensionSegments, build_extension, parse_extension
from limit_order_codec.encoding.traits import (
    DEFAULT_MAKER_TRAITS,
    MakerTraitsParams,
    TakerTraits,
    build_maker_traits,
    build_taker_traits,
    parse_maker_traits,
    parse_taker_traits,
)

__all__ = [
    "DEFAULT_MAKER_TRAITS",
    "ExtensionSegments",
    "MakerTraitsParams",
    "TakerTraits",
    "build_extension",
    "build_maker_traits",
    "build_taker_traits",
    "parse_extension",
    "parse_maker_traits",
    "parse_taker_traits",
]
