from __future__ import annotations

import struct


class BytesError(Exception):
    pass


def write_u64_le(value: int) -> bytes:
    if value < 0 or value >= 1 << 64:
        raise BytesError(f"value out of range for u64: {value}")
    return struct.pack("<Q", int(value))


def read_u64_le(data: bytes, offset: int = 0) -> int:
    if offset < 0 or offset + 8 > len(data):
        raise BytesError("read_u64_le out of bounds")
    return int(struct.unpack_from("<Q", data, offset)[0])


def pad_ascii(text: str, width: int) -> bytes:
    """Left-aligned, space-padded fixed-width ASCII field."""

    raw = text.encode("ascii")
    if len(raw) > width:
        raise BytesError(f"{text!r} does not fit in {width} bytes")
    return raw.ljust(width, b" ")
