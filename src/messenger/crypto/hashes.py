from __future__ import annotations

import hashlib

MD5_HEX_SIZE = 32


def md5_hex(data: bytes) -> bytes:
    return hashlib.md5(data).hexdigest().encode("ascii")  # noqa: S324 (integrity check, not auth)
