"""
Order extension blob.

Layout:
    offsets (32 bytes) || segment_0 || ... || segment_7 || custom_data

Slot i of the offsets word (bits [32*i, 32*i + 32)) holds the cumulative byte
length of segments 0..i, so segment i spans [offset[i-1], offset[i]) of the
payload. Custom data is not covered by the table; it runs from offset[7] to
the end. An extension with no bytes at all is empty, with no offsets word.
"""

from dataclasses import dataclass, fields

from limit_order_codec.core.errors import InvalidArgument
from limit_order_codec.encoding.flags import OFFSET_SLOT_BITS, OFFSET_WORD_BYTES
from limit_order_codec.utils.hexutil import BytesLike, to_bytes

OFFSET_SLOT_MAX = (1 << OFFSET_SLOT_BITS) - 1


@dataclass(frozen=True)
class ExtensionSegments:
    """
    The eight extension segments in canonical order, plus custom data.

    An absent segment is zero-length. Hex strings are accepted and
    normalised to bytes.
    """

    maker_asset_suffix: bytes = b""
    taker_asset_suffix: bytes = b""
    making_amount_data: bytes = b""
    taking_amount_data: bytes = b""
    predicate: bytes = b""
    permit: bytes = b""
    pre_interaction: bytes = b""
    post_interaction: bytes = b""
    custom_data: bytes = b""

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, to_bytes(getattr(self, f.name)))

    def segments(self) -> list[bytes]:
        """The eight offset-tracked segments, custom data excluded."""
        return [getattr(self, name) for name in SEGMENT_NAMES]

    def is_empty(self) -> bool:
        return not any(self.segments()) and not self.custom_data


SEGMENT_NAMES = tuple(f.name for f in fields(ExtensionSegments) if f.name != "custom_data")


def build_offsets(segments: list[bytes]) -> int:
    """Pack the running byte-length sums of `segments` into 32-bit slots."""
    offsets = 0
    total = 0
    for i, segment in enumerate(segments):
        total += len(segment)
        if total > OFFSET_SLOT_MAX:
            raise InvalidArgument(f"extension segments exceed {OFFSET_SLOT_MAX} bytes")
        offsets |= total << (OFFSET_SLOT_BITS * i)
    return offsets


def build_extension(segments: ExtensionSegments) -> bytes:
    """
    Concatenate the segments behind their offsets word.

    Returns:
        The extension bytes, or b"" when every segment and custom data is empty
    """
    parts = segments.segments()
    payload = b"".join(parts) + segments.custom_data
    if not payload:
        return b""
    offsets = build_offsets(parts)
    return offsets.to_bytes(OFFSET_WORD_BYTES, "big") + payload


def parse_offsets(offsets: int) -> list[int]:
    return [
        (offsets >> (OFFSET_SLOT_BITS * i)) & OFFSET_SLOT_MAX
        for i in range(len(SEGMENT_NAMES))
    ]


def parse_extension(extension: BytesLike) -> ExtensionSegments:
    """Split an extension blob back into its segments."""
    blob = to_bytes(extension)
    if not blob:
        return ExtensionSegments()
    if len(blob) < OFFSET_WORD_BYTES:
        raise InvalidArgument(f"extension shorter than its {OFFSET_WORD_BYTES}-byte offsets word")

    payload = blob[OFFSET_WORD_BYTES:]
    ends = parse_offsets(int.from_bytes(blob[:OFFSET_WORD_BYTES], "big"))
    start = 0
    values = {}
    for name, end in zip(SEGMENT_NAMES, ends):
        if end < start or end > len(payload):
            raise InvalidArgument(f"corrupt offset for {name}: {end}")
        values[name] = payload[start:end]
        start = end
    return ExtensionSegments(custom_data=payload[start:], **values)
