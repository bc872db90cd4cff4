from __future__ import annotations

import socket
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from messenger.transport.base import Endpoint

PeerHandler = Callable[[socket.socket], None]


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    _ = config
    for item in items:
        p = Path(str(item.fspath))
        parts = p.parts
        if "tests" in parts and "unit" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def tcp_peer() -> Iterator[Callable[[PeerHandler], Endpoint]]:
    """
    Start a loopback server that accepts one connection and runs `handler`
    on it in a background thread. The connection is closed after the
    handler returns.
    """

    listeners: list[socket.socket] = []
    threads: list[threading.Thread] = []
    failures: list[BaseException] = []

    def start(handler: PeerHandler) -> Endpoint:
        srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        srv.bind(("127.0.0.1", 0))
        srv.listen(1)
        srv.settimeout(5.0)
        listeners.append(srv)

        def serve() -> None:
            try:
                conn, _ = srv.accept()
            except OSError:
                return
            with conn:
                conn.settimeout(5.0)
                try:
                    handler(conn)
                except OSError:
                    pass
                except BaseException as ex:  # noqa: BLE001
                    failures.append(ex)

        t = threading.Thread(target=serve, daemon=True)
        t.start()
        threads.append(t)
        host, port = srv.getsockname()
        return Endpoint(host=host, port=port)

    yield start

    for t in threads:
        t.join(timeout=5.0)
    for srv in listeners:
        srv.close()
    if failures:
        raise failures[0]
