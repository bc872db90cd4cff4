from __future__ import annotations

from .client import MessengerClient, SendResult
from .config import Route, load_messenger_config, parse_security, resolve_route
from .requests import (
    Category,
    Request,
    build_chat_request,
    build_email_request,
    build_sms_request,
    normalize_email_recipients,
)

__all__ = [
    "Category",
    "MessengerClient",
    "Request",
    "Route",
    "SendResult",
    "build_chat_request",
    "build_email_request",
    "build_sms_request",
    "load_messenger_config",
    "normalize_email_recipients",
    "parse_security",
    "resolve_route",
]
