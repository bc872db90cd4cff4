from __future__ import annotations

from .client import MessengerClient, SendResult

__all__ = ["MessengerClient", "SendResult"]
