"""
Order builder

Checks:
1. No extension: salt, traits and extension untouched
2. Extension present: salt commits to keccak256(extension), HAS_EXTENSION set
3. Pre/post-interaction segments set their need-flags
4. Input validation happens before anything is built
"""

import pytest
from eth_hash.auto import keccak
from eth_utils import to_checksum_address

from limit_order_codec.core.errors import InvalidArgument
from limit_order_codec.encoding.extension import ExtensionSegments, parse_extension
from limit_order_codec.encoding.traits import build_maker_traits, parse_maker_traits
from limit_order_codec.execution.orders import EXTENSION_SALT_MASK, Order, build_order

MAKER = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
USDC = "0x1c7d4b196cb0c7b01d743fbc6116a902379c7238"
WETH = "0x7b79995e5f793a07bc00c21412e50ecae098e7f9"


def make_order(**kwargs) -> Order:
    params = dict(
        maker=MAKER,
        maker_asset=USDC,
        taker_asset=WETH,
        making_amount=5_000 * 10**6,
        taking_amount=2 * 10**18,
    )
    params.update(kwargs)
    return build_order(**params)


def low160_keccak(data: bytes) -> int:
    return int.from_bytes(keccak(data), "big") & ((1 << 160) - 1)


class TestNoExtension:
    def test_defaults(self) -> None:
        order = make_order()
        assert order.salt == 1
        assert order.extension == b""
        assert order.to_dict()["extension"] == "0x"
        assert order.receiver == "0x0000000000000000000000000000000000000000"
        assert order.maker_traits == int(build_maker_traits(), 16)

    def test_traits_unchanged(self) -> None:
        traits = build_maker_traits(nonce=9, expiry=1_700_000_000, allow_partial_fill=False)
        order = make_order(maker_traits=traits, salt=69)
        assert order.maker_traits == int(traits, 16)
        assert order.salt == 69
        assert not parse_maker_traits(order.maker_traits).has_extension

    def test_explicit_empty_segments(self) -> None:
        order = make_order(extension=ExtensionSegments(predicate="0x", permit=b""))
        assert order.extension == b""
        assert order.salt == 1


class TestWithExtension:
    def test_predicate_only(self) -> None:
        predicate = bytes.fromhex("bf15fcd8" + "00" * 28)
        order = make_order(extension=ExtensionSegments(predicate=predicate))
        offsets = int.from_bytes(order.extension[:32], "big")
        assert (offsets >> 128) & 0xFFFFFFFF == len(predicate)
        assert order.extension[32:] == predicate
        assert order.salt == low160_keccak(order.extension)
        assert parse_maker_traits(order.maker_traits).has_extension

    def test_salt_mask_is_fixed_width(self) -> None:
        """Caller salt does not influence the commitment width"""
        segments = ExtensionSegments(custom_data=b"\x01\x02\x03")
        small = make_order(salt=1, extension=segments)
        large = make_order(salt=(1 << 200) + 12345, extension=segments)
        assert small.salt == large.salt == low160_keccak(small.extension)
        assert small.salt <= EXTENSION_SALT_MASK

    def test_extension_roundtrip(self) -> None:
        segments = ExtensionSegments(making_amount_data=b"\xaa" * 52, permit=b"\xbb" * 100)
        order = make_order(extension=segments)
        assert parse_extension(order.extension) == segments

    def test_other_fields_preserved(self) -> None:
        order = make_order(extension=ExtensionSegments(permit=b"\x01"))
        assert order.maker == to_checksum_address(MAKER)
        assert order.making_amount == 5_000 * 10**6
        assert order.taking_amount == 2 * 10**18


class TestInteractionFlags:
    @pytest.mark.parametrize("pre,post", [(False, False), (True, False), (False, True), (True, True)])
    def test_need_flags(self, pre: bool, post: bool) -> None:
        segments = ExtensionSegments(
            pre_interaction=b"\x01" * 20 if pre else b"",
            post_interaction=b"\x02" * 24 if post else b"",
        )
        traits = parse_maker_traits(make_order(extension=segments).maker_traits)
        assert traits.need_preinteraction == pre
        assert traits.need_postinteraction == post
        assert traits.has_extension == (pre or post)

    def test_flags_or_into_existing_traits(self) -> None:
        traits = build_maker_traits(nonce=3, use_permit2=True)
        order = make_order(maker_traits=traits, extension=ExtensionSegments(pre_interaction=b"\x01"))
        decoded = parse_maker_traits(order.maker_traits)
        assert decoded.nonce == 3
        assert decoded.use_permit2
        assert decoded.need_preinteraction


class TestValidation:
    def test_bad_maker(self) -> None:
        with pytest.raises(InvalidArgument):
            make_order(maker="0xnotanaddress")

    def test_negative_amount(self) -> None:
        with pytest.raises(InvalidArgument):
            make_order(making_amount=-1)

    def test_amount_over_uint256(self) -> None:
        with pytest.raises(InvalidArgument):
            make_order(taking_amount=1 << 256)

    def test_unprefixed_trait_word_rejected(self) -> None:
        """A bare digit string is ambiguous between hex and decimal"""
        with pytest.raises(InvalidArgument):
            make_order(maker_traits=build_maker_traits()[2:])

    def test_unprefixed_salt_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            make_order(salt="69")

    def test_prefixed_hex_words_accepted(self) -> None:
        traits = build_maker_traits(nonce=1)
        order = make_order(maker_traits=traits, salt="0x45")
        assert order.maker_traits == int(traits, 16)
        assert order.salt == 69

    def test_lowercase_addresses_checksummed(self) -> None:
        order = make_order(maker=MAKER)
        assert order.maker == to_checksum_address(MAKER)
        assert order.taker_asset == to_checksum_address(WETH)

    def test_order_is_immutable(self) -> None:
        order = make_order()
        with pytest.raises(AttributeError):
            order.salt = 2  # type: ignore[misc]


class TestSerialisation:
    def test_to_dict(self) -> None:
        order = make_order(extension=ExtensionSegments(predicate=b"\x01"))
        record = order.to_dict()
        assert record["salt"] == "0x" + format(order.salt, "064x")
        assert len(record["makerTraits"]) == 66
        assert record["extension"] == "0x" + order.extension.hex()
        assert record["makerAsset"] == to_checksum_address(USDC)
        assert list(record) == [
            "salt",
            "maker",
            "receiver",
            "makerAsset",
            "takerAsset",
            "makingAmount",
            "takingAmount",
            "makerTraits",
            "extension",
        ]
