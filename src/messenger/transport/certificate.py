from __future__ import annotations

from dataclasses import dataclass

from cryptography import x509

from messenger.errors import SecurityModeNotImplemented


@dataclass(frozen=True, slots=True)
class CertificateFraming:
    """
    Certificate security placeholder.

    The messenger service defines this mode but no handshake has been
    specified for it, so every operation fails instead of emitting an
    unsecured frame.
    """

    certificate: x509.Certificate | None = None

    def encode(self, payload: bytes) -> bytes:
        raise SecurityModeNotImplemented("certificate security mode is not implemented")

    def decode_from_buffer(self, buffer: bytearray) -> bytes | None:
        raise SecurityModeNotImplemented("certificate security mode is not implemented")

    def decode_at_eof(self, buffer: bytearray) -> bytes:
        raise SecurityModeNotImplemented("certificate security mode is not implemented")
