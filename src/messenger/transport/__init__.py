from .base import Endpoint, Framing
from .certificate import CertificateFraming
from .codec import decode, encode
from .raw import RawFraming
from .security import (
    CertificateSecurity,
    NoSecurity,
    SecurityProfile,
    TokenSecurity,
    framing_for,
)
from .tcp import TcpSession
from .token import TokenFraming

__all__ = [
    "CertificateFraming",
    "CertificateSecurity",
    "Endpoint",
    "Framing",
    "NoSecurity",
    "RawFraming",
    "SecurityProfile",
    "TcpSession",
    "TokenFraming",
    "TokenSecurity",
    "decode",
    "encode",
    "framing_for",
]
