from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class Framing(Protocol):
    """
    Transport framing is responsible only for:
    - turning serialized request bytes into framed bytes (encode)
    - extracting the response payload from received bytes (decode)

    decode_from_buffer() returns None while the frame is incomplete.
    decode_at_eof() is called once the peer has closed the stream.
    """

    def encode(self, payload: bytes) -> bytes: ...
    def decode_from_buffer(self, buffer: bytearray) -> bytes | None: ...
    def decode_at_eof(self, buffer: bytearray) -> bytes: ...


@dataclass(frozen=True, slots=True)
class Endpoint:
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
