from __future__ import annotations

import pytest

from messenger.core.bytes import BytesError, pad_ascii, read_u64_le, write_u64_le
from messenger.core.request_id import RequestIdGenerator
from messenger.crypto.hashes import md5_hex


def test_u64_le_fixed_width() -> None:
    assert write_u64_le(1) == b"\x01" + b"\x00" * 7
    assert read_u64_le(write_u64_le(2**40 + 5)) == 2**40 + 5


def test_u64_rejects_out_of_range() -> None:
    with pytest.raises(BytesError):
        write_u64_le(-1)
    with pytest.raises(BytesError):
        write_u64_le(1 << 64)
    with pytest.raises(BytesError):
        read_u64_le(b"\x00" * 7)


def test_pad_ascii() -> None:
    assert pad_ascii("MD5", 8) == b"MD5     "
    with pytest.raises(BytesError):
        pad_ascii("TOO-LONG-TAG", 8)


def test_request_ids_strictly_increasing() -> None:
    gen = RequestIdGenerator()
    ids = [gen.next() for _ in range(100)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_md5_hex_is_lowercase_ascii() -> None:
    digest = md5_hex(b"hello")
    assert digest == b"5d41402abc4b2a76b9719d911017c592"
    assert len(digest) == 32
