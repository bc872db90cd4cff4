from __future__ import annotations

from dataclasses import dataclass
from cryptography import x509

from .base import Framing
from .certificate import CertificateFraming
from .raw import RawFraming
from .token import TokenFraming


@dataclass(frozen=True, slots=True)
class NoSecurity:
    name = "NONE"


@dataclass(frozen=True, slots=True)
class TokenSecurity:
    token: bytes
    response_token_size: int
    name = "TOKEN"

    def __repr__(self) -> str:
        return f"TokenSecurity(token=<{len(self.token)} bytes>, response_token_size={self.response_token_size})"


@dataclass(frozen=True, slots=True)
class CertificateSecurity:
    certificate: x509.Certificate | None = None
    name = "CERTIFICATE"


SecurityProfile = NoSecurity | TokenSecurity | CertificateSecurity


def framing_for(profile: SecurityProfile) -> Framing:
    if isinstance(profile, NoSecurity):
        return RawFraming()
    if isinstance(profile, TokenSecurity):
        return TokenFraming(token=profile.token, response_token_size=profile.response_token_size)
    if isinstance(profile, CertificateSecurity):
        return CertificateFraming(certificate=profile.certificate)
    raise TypeError(f"Unknown security profile: {profile!r}")
