from __future__ import annotations

from dataclasses import dataclass, field

from messenger.core.bytes import pad_ascii, read_u64_le, write_u64_le
from messenger.core.request_id import RequestIdGenerator
from messenger.crypto.hashes import MD5_HEX_SIZE, md5_hex
from messenger.errors import (
    ChecksumMismatch,
    MalformedFrame,
    TruncatedFrame,
    UnsupportedChecksum,
)

CHECKSUM_TYPE_MD5 = "MD5"
FIELD_SIZE = 8


@dataclass(frozen=True, slots=True)
class TokenFraming:
    """
    Messenger transport: shared-token security.

    Frame format (both directions):
    - security token (request: shared secret; response: response_token_size bytes)
    - total size: 8-byte little-endian unsigned (checksum length + payload length)
    - request id: 8-byte little-endian unsigned (not verified)
    - checksum type: 8-byte space-padded ASCII ("MD5")
    - checksum: lowercase hex MD5 of the payload (32 bytes)
    - payload bytes

    The token carries no length prefix; the receiver knows its size out of band.
    """

    token: bytes
    response_token_size: int
    request_ids: RequestIdGenerator = field(default_factory=RequestIdGenerator, compare=False)

    @property
    def response_header_size(self) -> int:
        return self.response_token_size + 3 * FIELD_SIZE

    def encode(self, payload: bytes) -> bytes:
        checksum = md5_hex(payload)
        return (
            self.token
            + write_u64_le(len(payload) + len(checksum))
            + write_u64_le(self.request_ids.next())
            + pad_ascii(CHECKSUM_TYPE_MD5, FIELD_SIZE)
            + checksum
            + payload
        )

    def decode_from_buffer(self, buffer: bytearray) -> bytes | None:
        header_size = self.response_header_size
        if len(buffer) < header_size:
            return None
        # Token and request id are read past, not validated.
        size_at = self.response_token_size
        total = read_u64_le(bytes(buffer[size_at : size_at + FIELD_SIZE]))
        if total < MD5_HEX_SIZE:
            raise MalformedFrame(f"total size {total} is smaller than the checksum field")
        end = header_size + total
        if len(buffer) < end:
            return None

        type_at = size_at + 2 * FIELD_SIZE
        raw_type = bytes(buffer[type_at : type_at + FIELD_SIZE])
        checksum_type = raw_type.strip(b" \t\r\n\x00").decode("ascii", "replace")
        body = bytes(buffer[header_size:end])
        del buffer[:end]

        received, payload = body[:MD5_HEX_SIZE], body[MD5_HEX_SIZE:]
        if checksum_type.upper() != CHECKSUM_TYPE_MD5:
            raise UnsupportedChecksum(f"unsupported checksum type {checksum_type!r}")
        if received.lower() != md5_hex(payload):
            raise ChecksumMismatch("response checksum does not match payload")
        return payload

    def decode_at_eof(self, buffer: bytearray) -> bytes:
        payload = self.decode_from_buffer(buffer)
        if payload is None:
            raise TruncatedFrame(f"connection closed after {len(buffer)} bytes of an incomplete frame")
        return payload
