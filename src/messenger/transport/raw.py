from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RawFraming:
    """
    No security: the JSON request is written as-is and the response is
    everything the peer sends until it closes the connection.
    """

    def encode(self, payload: bytes) -> bytes:
        return bytes(payload)

    def decode_from_buffer(self, buffer: bytearray) -> bytes | None:
        return None

    def decode_at_eof(self, buffer: bytearray) -> bytes:
        payload = bytes(buffer)
        buffer.clear()
        return payload
