from __future__ import annotations

import time


class RequestIdGenerator:
    """
    Generate frame request ids.

    Ids are unix seconds, bumped by one when the clock has not advanced,
    so they stay strictly increasing for the lifetime of the generator.
    The messenger service does not verify them.
    """

    __slots__ = ("_last",)

    def __init__(self) -> None:
        self._last = 0

    def next(self) -> int:
        req_id = int(time.time())
        if req_id <= self._last:
            req_id = self._last + 1
        self._last = req_id
        return req_id
