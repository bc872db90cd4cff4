from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from types import TracebackType

from messenger.errors import (
    ConnectError,
    ResolutionError,
    TransportError,
    TransportTimeout,
    WriteError,
)

from .base import Endpoint, Framing
from .codec import READ_CHUNK_SIZE, read_frame

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TcpSession:
    """
    One TCP connection carrying exactly one request and one response.

    Use as a context manager so the socket is closed on every path:

        with TcpSession(endpoint, framing) as session:
            session.send(payload)
            response = session.recv()
    """

    endpoint: Endpoint
    framing: Framing
    timeout: float | None = 10.0

    _sock: socket.socket | None = None
    _used: bool = False

    READ_CHUNK_SIZE = READ_CHUNK_SIZE

    def connect(self) -> None:
        if self._sock is not None:
            return
        if self._used:
            raise TransportError("Session already used; open a new one per request.")
        self._used = True
        try:
            address = socket.gethostbyname(self.endpoint.host)
        except (socket.gaierror, UnicodeError) as e:
            raise ResolutionError(f"Failed to resolve host {self.endpoint.host!r}: {e}") from e
        try:
            self._sock = socket.create_connection((address, self.endpoint.port), timeout=self.timeout)
        except TimeoutError as e:
            raise TransportTimeout(f"Timed out connecting to {self.endpoint}") from e
        except OSError as e:
            raise ConnectError(f"Failed to connect to {self.endpoint} ({address}): {e}") from e
        logger.debug("Connected to %s (%s)", self.endpoint, address)

    def close(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.close()
        finally:
            self._sock = None
            logger.debug("Closed connection to %s", self.endpoint)

    def send(self, payload: bytes) -> None:
        self.send_frame(self.framing.encode(payload))

    def send_frame(self, framed: bytes) -> None:
        """Write bytes already produced by this session's framing."""

        if self._sock is None:
            raise TransportError("Not connected.")
        try:
            self._sock.sendall(framed)
        except TimeoutError as e:
            raise TransportTimeout(f"Timed out writing to {self.endpoint}") from e
        except OSError as e:
            raise WriteError(f"Failed to write to {self.endpoint}: {e}") from e
        logger.debug("Sent %d bytes to %s", len(framed), self.endpoint)

    def recv(self) -> bytes:
        if self._sock is None:
            raise TransportError("Not connected.")
        payload = read_frame(self._sock, self.framing, chunk_size=self.READ_CHUNK_SIZE)
        logger.debug("Received %d payload bytes from %s", len(payload), self.endpoint)
        return payload

    def __enter__(self) -> TcpSession:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
