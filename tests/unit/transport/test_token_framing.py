from __future__ import annotations

import hashlib
import struct

import pytest

from messenger.errors import (
    ChecksumMismatch,
    MalformedFrame,
    TruncatedFrame,
    UnsupportedChecksum,
)
from messenger.transport.token import TokenFraming


def _response(
    payload: bytes,
    *,
    token: bytes = b"T" * 8,
    checksum: bytes | None = None,
    checksum_type: bytes = b"MD5     ",
    size: int | None = None,
) -> bytes:
    digest = hashlib.md5(payload).hexdigest().encode() if checksum is None else checksum
    total = len(digest) + len(payload) if size is None else size
    return token + struct.pack("<Q", total) + struct.pack("<Q", 7) + checksum_type + digest + payload


def test_token_encode_layout() -> None:
    f = TokenFraming(token=b"secret-token", response_token_size=8)
    payload = b'{"type":"sms"}'
    framed = f.encode(payload)

    assert framed.startswith(b"secret-token")
    rest = framed[len(b"secret-token") :]
    (total,) = struct.unpack("<Q", rest[:8])
    assert total == len(payload) + 32
    (req_id,) = struct.unpack("<Q", rest[8:16])
    assert req_id > 0
    assert rest[16:24] == b"MD5     "
    assert rest[24:56] == hashlib.md5(payload).hexdigest().encode()
    assert rest[56:] == payload


def test_token_request_ids_increase() -> None:
    f = TokenFraming(token=b"", response_token_size=0)
    ids = [struct.unpack("<Q", f.encode(b"x")[8:16])[0] for _ in range(5)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_token_roundtrip_with_echoing_peer() -> None:
    f = TokenFraming(token=b"abc", response_token_size=3)
    payload = b'{"status":"ok","id":42}'
    buf = bytearray(f.encode(payload))
    assert f.decode_from_buffer(buf) == payload
    assert buf == bytearray()


def test_token_decode_partial_buffer() -> None:
    f = TokenFraming(token=b"x", response_token_size=8)
    framed = _response(b"hello")
    buf = bytearray(framed[:10])
    assert f.decode_from_buffer(buf) is None
    buf.extend(framed[10:-1])
    assert f.decode_from_buffer(buf) is None
    buf.extend(framed[-1:])
    assert f.decode_from_buffer(buf) == b"hello"


def test_token_decode_accepts_uppercase_checksum_and_type() -> None:
    f = TokenFraming(token=b"x", response_token_size=8)
    digest = hashlib.md5(b"hello").hexdigest().upper().encode()
    buf = bytearray(_response(b"hello", checksum=digest, checksum_type=b"md5     "))
    assert f.decode_from_buffer(buf) == b"hello"


def test_token_decode_empty_payload() -> None:
    f = TokenFraming(token=b"x", response_token_size=8)
    assert f.decode_from_buffer(bytearray(_response(b""))) == b""


def test_token_decode_rejects_corrupted_payload() -> None:
    f = TokenFraming(token=b"x", response_token_size=8)
    framed = bytearray(_response(b"hello world"))
    framed[-1] ^= 0x01
    with pytest.raises(ChecksumMismatch):
        f.decode_from_buffer(framed)


def test_token_decode_rejects_unknown_checksum_type() -> None:
    f = TokenFraming(token=b"x", response_token_size=8)
    with pytest.raises(UnsupportedChecksum):
        f.decode_from_buffer(bytearray(_response(b"hello", checksum_type=b"SHA1    ")))


def test_token_decode_rejects_size_below_checksum() -> None:
    f = TokenFraming(token=b"x", response_token_size=8)
    with pytest.raises(MalformedFrame):
        f.decode_from_buffer(bytearray(_response(b"hello", size=10)))


def test_token_eof_with_incomplete_frame_is_truncated() -> None:
    f = TokenFraming(token=b"x", response_token_size=8)
    framed = _response(b"a longer response body")
    with pytest.raises(TruncatedFrame):
        f.decode_at_eof(bytearray(framed[:-3]))
    with pytest.raises(TruncatedFrame):
        f.decode_at_eof(bytearray(framed[:5]))
    with pytest.raises(TruncatedFrame):
        f.decode_at_eof(bytearray())


def test_token_decode_ignores_response_token_contents() -> None:
    f = TokenFraming(token=b"sent", response_token_size=4)
    buf = bytearray(_response(b"ok", token=b"ZZZZ"))
    assert f.decode_from_buffer(buf) == b"ok"
