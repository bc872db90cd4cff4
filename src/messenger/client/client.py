from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from messenger.errors import ConfigurationMissing, MessengerError, RequestInvalid
from messenger.transport.security import framing_for
from messenger.transport.tcp import TcpSession

from .config import Route, resolve_route, sms_sender
from .requests import (
    Request,
    build_chat_request,
    build_email_request,
    build_sms_request,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SendResult:
    payload: bytes | None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.payload is not None and not self.errors

    @classmethod
    def failed(cls, *errors: str) -> SendResult:
        return cls(payload=None, errors=tuple(errors))


class MessengerClient:
    """
    Submit chat, SMS and email notifications to the messenger service.

    Each send opens one TCP connection, writes one framed request, reads one
    framed response and closes the connection. Failures never raise: the
    send returns None and get_errors() describes what went wrong in that
    call. Use one client per in-flight request when sending concurrently.
    """

    def __init__(self, configuration: Mapping[str, Any] | None = None) -> None:
        self._configuration: Mapping[str, Any] = dict(configuration or {})
        self._last = SendResult(payload=None)

    def set_configuration(self, configuration: Mapping[str, Any] | None) -> None:
        self._configuration = dict(configuration or {})

    @property
    def configuration(self) -> Mapping[str, Any]:
        return self._configuration

    def get_errors(self) -> list[str]:
        return list(self._last.errors)

    @property
    def last_result(self) -> SendResult:
        return self._last

    def send_chat(self, to: Any, message: Any) -> bytes | None:
        return self.execute(build_chat_request(to, message)).payload

    def send_sms(self, to: Any, message: Any) -> bytes | None:
        request = build_sms_request(to, message, sender=sms_sender(self._configuration))
        return self.execute(request).payload

    def send_email(
        self,
        to: Any,
        subject: str | None,
        message: Any,
        cc: Any = None,
        bcc: Any = None,
    ) -> bytes | None:
        return self.execute(build_email_request(to, subject, message, cc=cc, bcc=bcc)).payload

    def execute(self, request: Request) -> SendResult:
        if not isinstance(request, Request):
            raise TypeError(f"execute() expects a Request, got {type(request).__name__}")
        route: Route | None = None
        try:
            route = resolve_route(self._configuration, request.category)
            result = SendResult(payload=self._exchange(route, request))
        except MessengerError as ex:
            result = SendResult.failed(ex.describe())
            self._log_failure(request, route, ex)
        except OSError as ex:
            result = SendResult.failed(f"TransportError: {ex}")
            self._log_failure(request, route, ex)
        self._last = result
        return result

    def _exchange(self, route: Route, request: Request) -> bytes:
        try:
            payload = request.serialize()
        except (TypeError, ValueError) as e:
            raise RequestInvalid(f"Request cannot be serialized: {e}") from e
        if not payload:
            raise ConfigurationMissing("Empty request payload")
        framing = framing_for(route.security)
        # Frame before connecting so an unusable security mode never opens a socket.
        framed = framing.encode(payload)
        session = TcpSession(endpoint=route.endpoint, framing=framing, timeout=route.timeout)
        with session:
            session.send_frame(framed)
            return session.recv()

    @staticmethod
    def _log_failure(request: Request, route: Route | None, ex: Exception) -> None:
        endpoint = route.endpoint if route is not None else None
        logger.info(
            "Send failed (category=%s endpoint=%s): %s",
            request.category.value,
            endpoint,
            type(ex).__name__,
            exc_info=ex,
        )
