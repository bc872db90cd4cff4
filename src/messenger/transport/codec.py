from __future__ import annotations

from typing import Protocol

from messenger.errors import ReadError, TransportTimeout

from .base import Framing
from .security import SecurityProfile, framing_for

READ_CHUNK_SIZE = 4096


class Readable(Protocol):
    def recv(self, bufsize: int, /) -> bytes: ...


def encode(payload: bytes, profile: SecurityProfile) -> bytes:
    return framing_for(profile).encode(payload)


def read_frame(stream: Readable, framing: Framing, *, chunk_size: int = READ_CHUNK_SIZE) -> bytes:
    """
    Read from `stream` until `framing` yields a payload or the peer closes.

    A zero-length read marks end-of-data; the framing then decides whether
    what was buffered is a complete response.
    """

    buffer = bytearray()
    while True:
        payload = framing.decode_from_buffer(buffer)
        if payload is not None:
            return payload
        try:
            chunk = stream.recv(chunk_size)
        except TimeoutError as e:
            raise TransportTimeout(f"read timed out after {len(buffer)} bytes") from e
        except OSError as e:
            raise ReadError(f"read failed after {len(buffer)} bytes: {e}") from e
        if not chunk:
            return framing.decode_at_eof(buffer)
        buffer.extend(chunk)


def decode(stream: Readable, profile: SecurityProfile) -> bytes:
    return read_frame(stream, framing_for(profile))
