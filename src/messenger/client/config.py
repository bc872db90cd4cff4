from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cryptography import x509

from messenger.errors import ConfigurationInvalid, ConfigurationMissing
from messenger.transport.base import Endpoint
from messenger.transport.security import (
    CertificateSecurity,
    NoSecurity,
    SecurityProfile,
    TokenSecurity,
)

from .requests import DEFAULT_SMS_FROM, Category

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# Config key prefixes per category, first match wins. "slack" is the
# historical name of the chat endpoint.
CATEGORY_PREFIXES: dict[Category, tuple[str, ...]] = {
    Category.CHAT: ("chat", "slack"),
    Category.SMS: ("sms",),
    Category.EMAIL: ("email",),
}
DEFAULT_PREFIX = "default"


@dataclass(frozen=True, slots=True)
class Route:
    """Everything one send needs to reach the service for a category."""

    category: Category
    endpoint: Endpoint
    security: SecurityProfile
    timeout: float | None = DEFAULT_TIMEOUT


def _present(value: Any) -> bool:
    return value is not None and value != "" and value != {}


def _lookup(config: Mapping[str, Any], prefixes: tuple[str, ...], suffix: str) -> Any:
    for prefix in prefixes:
        value = config.get(f"{prefix}{suffix}")
        if _present(value):
            return value
    return None


def _as_port(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationInvalid(f"Invalid port: {value!r}")
    if isinstance(value, int):
        port = value
    elif isinstance(value, str):
        try:
            port = int(value.strip())
        except ValueError as e:
            raise ConfigurationInvalid(f"Invalid port: {value!r}") from e
    else:
        raise ConfigurationInvalid(f"Invalid port: {value!r}")
    if not (0 < port < 65536):
        raise ConfigurationInvalid(f"Port out of range: {port}")
    return port


def _as_timeout(value: Any) -> float | None:
    if value is None:
        return DEFAULT_TIMEOUT
    if isinstance(value, str) and value.strip().lower() in {"none", "null"}:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationInvalid(f"Invalid timeout: {value!r}") from e
    if timeout <= 0:
        raise ConfigurationInvalid(f"Timeout must be positive: {timeout}")
    return timeout


def _load_certificate(section: Mapping[str, Any]) -> x509.Certificate | None:
    pem = section.get("certificate")
    path = section.get("certificateFile")
    if not _present(pem) and not _present(path):
        return None
    try:
        if _present(pem):
            data = pem.encode("utf-8") if isinstance(pem, str) else bytes(pem)
        else:
            data = Path(path).read_bytes()
        return x509.load_pem_x509_certificate(data)
    except (OSError, TypeError, ValueError) as e:
        raise ConfigurationInvalid(f"Invalid certificate: {e}") from e


def parse_security(section: Any) -> SecurityProfile:
    """
    Build a security profile from a `<category>Security` mapping:
    {"type": "TOKEN" | "CERTIFICATE" | "NONE", "token": ..., "tokenSizeBytes": ...}
    """

    if not _present(section):
        return NoSecurity()
    if not isinstance(section, Mapping):
        raise ConfigurationInvalid(f"Security section must be a mapping, got {type(section).__name__}")

    kind = str(section.get("type") or "NONE").strip().upper()
    if kind == "NONE":
        return NoSecurity()
    if kind == "TOKEN":
        token_raw = section.get("token")
        if not _present(token_raw):
            raise ConfigurationInvalid("TOKEN security requires a token")
        if isinstance(token_raw, str):
            token = token_raw.encode("utf-8")
        elif isinstance(token_raw, (bytes, bytearray)):
            token = bytes(token_raw)
        elif isinstance(token_raw, int) and not isinstance(token_raw, bool):
            token = str(token_raw).encode("ascii")
        else:
            raise ConfigurationInvalid(f"Invalid token type: {type(token_raw).__name__}")
        size_raw = section.get("tokenSizeBytes")
        if size_raw is None:
            size_raw = len(token)
        if isinstance(size_raw, bool):
            raise ConfigurationInvalid(f"Invalid tokenSizeBytes: {size_raw!r}")
        try:
            size = int(size_raw)
        except (TypeError, ValueError) as e:
            raise ConfigurationInvalid(f"Invalid tokenSizeBytes: {size_raw!r}") from e
        if size < 0:
            raise ConfigurationInvalid(f"tokenSizeBytes must not be negative: {size}")
        return TokenSecurity(token=token, response_token_size=size)
    if kind == "CERTIFICATE":
        return CertificateSecurity(certificate=_load_certificate(section))

    logger.warning("Unknown security type %r; sending without security", kind)
    return NoSecurity()


def resolve_route(config: Mapping[str, Any] | None, category: Category) -> Route:
    """
    Resolve endpoint and security for one category from the current config.

    Only the category's own keys and the explicit default* keys are
    consulted; nothing carries over from earlier sends.
    """

    config = config or {}
    prefixes = CATEGORY_PREFIXES[category]

    host = _lookup(config, prefixes, "Host")
    port = _lookup(config, prefixes, "Port")
    security = _lookup(config, prefixes, "Security")
    if host is None or port is None:
        host = _lookup(config, (DEFAULT_PREFIX,), "Host")
        port = _lookup(config, (DEFAULT_PREFIX,), "Port")
        if security is None:
            security = _lookup(config, (DEFAULT_PREFIX,), "Security")
    if host is None or port is None:
        raise ConfigurationMissing(f"No host/port configured for {category.value}")
    if not isinstance(host, str):
        raise ConfigurationInvalid(f"Invalid host: {host!r}")

    return Route(
        category=category,
        endpoint=Endpoint(host=host.strip(), port=_as_port(port)),
        security=parse_security(security),
        timeout=_as_timeout(config.get("timeout")),
    )


def sms_sender(config: Mapping[str, Any] | None) -> str:
    value = (config or {}).get("smsFrom")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_SMS_FROM


def load_messenger_config(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except ValueError as e:
        raise ConfigurationInvalid(f"Invalid JSON in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationInvalid(f"Config root must be an object: {p}")
    return raw
