from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_SMS_FROM = "IdentityBnk"


class Category(str, Enum):
    CHAT = "chat"
    SMS = "sms"
    EMAIL = "email"

    @property
    def wire_type(self) -> str:
        return _WIRE_TYPES[self]

    @property
    def data_key(self) -> str:
        return _DATA_KEYS[self]


_WIRE_TYPES = {Category.CHAT: "communicator", Category.SMS: "sms", Category.EMAIL: "email"}
_DATA_KEYS = {Category.CHAT: "messageData", Category.SMS: "smsData", Category.EMAIL: "emailData"}


@dataclass(frozen=True, slots=True)
class Request:
    """
    One logical message for the messenger service.

    `recipients` is sent as given for chat and sms; email recipients are
    normalized to a list of {"email": ...} descriptors by build_email_request().
    """

    category: Category
    recipients: Any
    body: Any
    subject: str | None = None
    cc: tuple[Any, ...] = ()
    bcc: tuple[Any, ...] = ()
    sender: str | None = None

    def to_json_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"to": _jsonable(self.recipients)}
        if self.category is Category.SMS:
            data["from"] = self.sender
        if self.category is Category.EMAIL:
            data["subject"] = self.subject
        data["body"] = _jsonable(self.body)
        if self.cc:
            data["cc"] = [_jsonable(r) for r in self.cc]
        if self.bcc:
            data["bcc"] = [_jsonable(r) for r in self.bcc]
        return {"type": self.category.wire_type, self.category.data_key: data}

    def serialize(self) -> bytes:
        return json.dumps(self.to_json_dict(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _jsonable(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_jsonable(v) for v in value]
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def normalize_email_recipients(value: Any) -> tuple[Any, ...]:
    """
    A single address becomes ({"email": value},); sequences of descriptors
    are kept in order. Empty values normalize to ().
    """

    if value is None or value == "":
        return ()
    if isinstance(value, Mapping):
        return (value,)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(value)
    return ({"email": value},)


def build_chat_request(to: Any, message: Any) -> Request:
    return Request(category=Category.CHAT, recipients=to, body=message)


def build_sms_request(to: Any, message: Any, *, sender: str = DEFAULT_SMS_FROM) -> Request:
    return Request(category=Category.SMS, recipients=to, body=message, sender=sender)


def build_email_request(
    to: Any,
    subject: str | None,
    message: Any,
    cc: Any = None,
    bcc: Any = None,
) -> Request:
    recipients = normalize_email_recipients(to)
    return Request(
        category=Category.EMAIL,
        recipients=recipients,
        subject=subject,
        body={"html": message},
        cc=normalize_email_recipients(cc),
        bcc=normalize_email_recipients(bcc),
    )
