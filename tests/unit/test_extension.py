"""
Extension builder

Checks:
1. Empty input gives an empty extension
2. Offsets word holds cumulative segment ends, slot i at bits [32*i, 32*i+32)
3. Custom data is appended after the segments and not tracked by offsets
4. parse_extension recovers the segments
"""

import pytest

from limit_order_codec.core.errors import InvalidArgument
from limit_order_codec.encoding.extension import (
    SEGMENT_NAMES,
    ExtensionSegments,
    build_extension,
    build_offsets,
    parse_extension,
    parse_offsets,
)


def offsets_of(extension: bytes) -> list:
    return parse_offsets(int.from_bytes(extension[:32], "big"))


class TestBuild:
    def test_empty(self) -> None:
        assert build_extension(ExtensionSegments()) == b""

    def test_canonical_order(self) -> None:
        assert SEGMENT_NAMES == (
            "maker_asset_suffix",
            "taker_asset_suffix",
            "making_amount_data",
            "taking_amount_data",
            "predicate",
            "permit",
            "pre_interaction",
            "post_interaction",
        )

    def test_predicate_only(self) -> None:
        predicate = bytes.fromhex("deadbeef")
        extension = build_extension(ExtensionSegments(predicate=predicate))
        assert extension[32:] == predicate
        assert offsets_of(extension) == [0, 0, 0, 0, 4, 4, 4, 4]
        assert (int.from_bytes(extension[:32], "big") >> 128) & 0xFFFFFFFF == 4

    def test_cumulative_offsets(self) -> None:
        segments = ExtensionSegments(
            maker_asset_suffix=b"\x01",
            taking_amount_data=b"\x02\x02",
            permit=b"\x03" * 5,
            post_interaction=b"\x04" * 10,
        )
        extension = build_extension(segments)
        offsets = offsets_of(extension)
        assert offsets == [1, 1, 1, 3, 3, 8, 8, 18]
        assert offsets == sorted(offsets)
        assert extension[32:] == b"\x01\x02\x02" + b"\x03" * 5 + b"\x04" * 10

    def test_custom_data_only(self) -> None:
        extension = build_extension(ExtensionSegments(custom_data="0xcafe"))
        assert extension == bytes(32) + b"\xca\xfe"

    def test_custom_data_not_in_offsets(self) -> None:
        extension = build_extension(ExtensionSegments(predicate=b"\x01", custom_data=b"\xff" * 7))
        assert offsets_of(extension)[-1] == 1
        assert extension.endswith(b"\xff" * 7)

    def test_hex_inputs(self) -> None:
        assert ExtensionSegments(permit="0xabcd").permit == b"\xab\xcd"
        assert ExtensionSegments(permit="0x").permit == b""

    def test_bad_hex(self) -> None:
        with pytest.raises(InvalidArgument):
            ExtensionSegments(predicate="0xzz")

    def test_slot_overflow(self) -> None:
        class Sized(bytes):
            def __len__(self):
                return 1 << 32

        with pytest.raises(InvalidArgument):
            build_offsets([Sized()])


class TestParse:
    def test_roundtrip(self) -> None:
        segments = ExtensionSegments(
            maker_asset_suffix=b"\x10" * 3,
            predicate=b"\x20" * 40,
            pre_interaction=b"\x30" * 21,
            post_interaction=b"\x40",
            custom_data=b"\x50\x51",
        )
        assert parse_extension(build_extension(segments)) == segments

    def test_empty(self) -> None:
        assert parse_extension(b"") == ExtensionSegments()
        assert parse_extension("0x") == ExtensionSegments()

    def test_truncated(self) -> None:
        with pytest.raises(InvalidArgument):
            parse_extension(b"\x00" * 10)

    def test_offset_past_end(self) -> None:
        extension = build_extension(ExtensionSegments(predicate=b"\x01\x02"))
        with pytest.raises(InvalidArgument):
            parse_extension(extension[:-1])
