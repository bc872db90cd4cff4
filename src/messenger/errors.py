from __future__ import annotations


class MessengerError(Exception):
    """Base class for every failure a send can record."""

    kind = "MessengerError"

    def describe(self) -> str:
        return f"{self.kind}: {self}"


class ConfigurationMissing(MessengerError):
    kind = "ConfigurationMissing"


class ConfigurationInvalid(MessengerError):
    kind = "ConfigurationInvalid"


class RequestInvalid(MessengerError):
    kind = "RequestInvalid"


class TransportError(MessengerError):
    kind = "TransportError"


class ResolutionError(TransportError):
    kind = "ResolutionError"


class ConnectError(TransportError):
    kind = "ConnectError"


class WriteError(TransportError):
    kind = "WriteError"


class ReadError(TransportError):
    kind = "ReadError"


class TransportTimeout(TransportError):
    kind = "Timeout"


class SecurityModeNotImplemented(TransportError):
    kind = "NotImplemented"


class FrameError(TransportError):
    kind = "FrameError"


class TruncatedFrame(FrameError):
    kind = "TruncatedFrame"


class ChecksumMismatch(FrameError):
    kind = "ChecksumMismatch"


class UnsupportedChecksum(FrameError):
    kind = "UnsupportedChecksum"


class MalformedFrame(FrameError):
    kind = "MalformedFrame"
